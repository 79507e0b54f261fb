import json
import os
import pytest
from unittest.mock import patch

from sosgen.provider import GenerationProvider


AURORA_INPUT = "Buque 'Aurora' MMSI 224123456 con 5 POB tiene una vía de agua en 43°21'N 008°25'W"

AURORA_ES = (
    "Buque 'Aurora' con MMSI 224123456 y 5 personas a bordo, reporta una vía de agua "
    "en la posición 43°21'N 008°25'W."
)

AURORA_EN = (
    "Vessel 'Aurora', MMSI 224123456 with 5 persons on board, reports taking on water "
    "in position 43°21'N 008°25'W."
)


class StubProvider(GenerationProvider):
    """Deterministic provider returning canned text or raising."""

    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt: str, response_schema: dict, temperature: float) -> str:
        self.calls.append((prompt, response_schema, temperature))
        if self.error:
            raise self.error
        return self.text


# Set test environment variables before any imports
@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for all tests."""
    with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test-key-123"}):
        os.environ.pop("REDIS_URL", None)
        yield


@pytest.fixture
def aurora_provider():
    """Provider answering with the Aurora extraction (no station, no MRCC)."""
    return StubProvider(json.dumps({
        "spanishDescription": AURORA_ES,
        "englishDescription": AURORA_EN,
    }))
