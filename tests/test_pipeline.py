import pytest

from sosgen.composer import BLANK
from sosgen.errors import MalformedResponse
from sosgen.pipeline import generate_mayday_messages

from tests.conftest import AURORA_EN, AURORA_ES, AURORA_INPUT, StubProvider


@pytest.mark.asyncio
async def test_aurora_end_to_end(aurora_provider):
    """Aurora report without station or MRCC."""
    messages = await generate_mayday_messages(AURORA_INPUT, aurora_provider)

    assert f"AQUI {BLANK} (x3)" in messages.es
    assert f"SALVAMENTO MARITIMO {BLANK}" in messages.es
    assert AURORA_ES in messages.es
    assert "INFORMACION Nº 1" in messages.es
    assert AURORA_EN in messages.en
    assert "INFORMATION Nº 1" in messages.en


@pytest.mark.asyncio
async def test_pipeline_propagates_extraction_errors():
    with pytest.raises(MalformedResponse):
        await generate_mayday_messages("velero", StubProvider("not json"))
