"""
Field extraction for MAYDAY RELAY messages.

The provider's output is untrusted: it is parsed and re-validated on every
call. Whether the descriptions are faithful to the input cannot be checked
here; the prompt is the only guard against invented facts.
"""

import json
import logging

from pydantic import ValidationError

from sosgen.errors import (
    SosgenError,
    MalformedResponse,
    IncompleteExtraction,
    ProviderError,
)
from sosgen.extraction_prompt import (
    EXTRACTION_SCHEMA,
    EXTRACTION_TEMPERATURE,
    REQUIRED_FIELDS,
    build_extraction_prompt,
)
from sosgen.models import ExtractedData
from sosgen.provider import GenerationProvider

logger = logging.getLogger(__name__)


class Extractor:
    """Stateless wrapper around a generation provider."""

    def __init__(self, provider: GenerationProvider):
        self.provider = provider

    async def extract(self, natural_input: str) -> ExtractedData:
        """
        Extract station, MRCC and bilingual descriptions from free text.

        Raises:
            ProviderError: the provider call failed
            MalformedResponse: the provider did not return a JSON object of the expected shape
            IncompleteExtraction: a required description is missing or blank
        """
        prompt = build_extraction_prompt(natural_input)

        try:
            raw_text = await self.provider.generate(
                prompt, EXTRACTION_SCHEMA, EXTRACTION_TEMPERATURE
            )
        except SosgenError:
            raise
        except Exception as e:
            logger.error("Generation provider error: %s", e)
            raise ProviderError() from e

        data = parse_response(raw_text)

        missing = missing_required_fields(data)
        if missing:
            logger.warning("Incomplete extraction, missing: %s", missing)
            raise IncompleteExtraction(missing)

        return data


def parse_response(raw_text: str) -> ExtractedData:
    """Parse the provider's raw text into :class:`ExtractedData`."""
    text = (raw_text or "").strip()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse JSON response from provider: %s", text[:500])
        raise MalformedResponse() from e

    if not isinstance(payload, dict):
        logger.error("Provider returned JSON that is not an object: %s", text[:500])
        raise MalformedResponse()

    try:
        return ExtractedData.model_validate(payload)
    except ValidationError as e:
        logger.error("Provider JSON does not match the extraction schema: %s", e)
        raise MalformedResponse() from e


def missing_required_fields(data: ExtractedData) -> list[str]:
    """Names of required fields that are absent or blank, in schema order."""
    values = data.model_dump(by_alias=True)
    return [
        name for name in REQUIRED_FIELDS
        if not (values.get(name) or "").strip()
    ]
