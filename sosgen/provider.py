"""
Generation providers for schema-constrained text generation.

The extractor only depends on :class:`GenerationProvider`; any backend that
can return JSON text for a prompt and a JSON schema satisfies it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import AsyncOpenAI

from sosgen.config import Settings, get_settings
from sosgen.errors import ProviderUnavailable

logger = logging.getLogger(__name__)


class GenerationProvider(ABC):
    """Backend able to produce JSON text that follows a given schema."""

    @abstractmethod
    async def generate(self, prompt: str, response_schema: dict, temperature: float) -> str:
        """
        Run one generation call.

        Returns the raw response text. Implementations raise on transport or
        API failure; the caller decides how to report it.
        """
        ...


class OpenAIProvider(GenerationProvider):
    """OpenAI chat completions with a JSON-schema response format."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout: float = 30.0,
        client: Optional[AsyncOpenAI] = None
    ):
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=timeout)

    async def generate(self, prompt: str, response_schema: dict, temperature: float) -> str:
        logger.debug("Calling OpenAI: model=%s, temperature=%s", self.model, temperature)
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "Always respond with valid JSON."},
                {"role": "user", "content": prompt}
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "mayday_relay_extraction",
                    "schema": response_schema,
                },
            },
            temperature=temperature
        )
        return response.choices[0].message.content or ""


class UnconfiguredProvider(GenerationProvider):
    """Placeholder used when no credential is set; every call fails."""

    async def generate(self, prompt: str, response_schema: dict, temperature: float) -> str:
        raise ProviderUnavailable()


def build_provider(settings: Settings) -> GenerationProvider:
    """
    Build the configured provider.

    Without a credential the returned provider raises ``ProviderUnavailable``
    when used, so request validation still runs first.
    """
    if not settings.openai_api_key:
        return UnconfiguredProvider()

    return OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout=settings.openai_timeout
    )


def get_provider() -> GenerationProvider:
    """FastAPI dependency returning the provider for the current settings."""
    return build_provider(get_settings())
