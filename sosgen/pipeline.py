from sosgen.composer import compose
from sosgen.extractor import Extractor
from sosgen.models import GeneratedMessages
from sosgen.provider import GenerationProvider


async def generate_mayday_messages(
    natural_input: str,
    provider: GenerationProvider
) -> GeneratedMessages:
    """Free text in, bilingual MAYDAY RELAY pair out."""
    fields = await Extractor(provider).extract(natural_input)
    return compose(fields)
