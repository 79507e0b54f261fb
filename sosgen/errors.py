"""Error taxonomy for the extraction pipeline.

Every error carries a Spanish message meant for the operator and a stable
``code`` for programmatic handling.
"""

from typing import Sequence

FIELD_LABELS = {
    "spanishDescription": "descripción en español",
    "englishDescription": "descripción en inglés",
}


class SosgenError(Exception):
    """Base class for failures surfaced to the caller."""

    code = "error"
    default_message = "Error interno del servidor"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class ProviderUnavailable(SosgenError):
    """No provider credential configured."""

    code = "provider_unavailable"
    default_message = "Clave de API de OpenAI no configurada"


class MalformedResponse(SosgenError):
    """The provider answered with something that is not the JSON object we asked for."""

    code = "malformed_response"
    default_message = "La respuesta de la IA no tiene un formato válido. Inténtelo de nuevo."


class ProviderError(SosgenError):
    """The provider call itself failed (network, quota, timeout...)."""

    code = "provider_error"
    default_message = (
        "Ocurrió un error inesperado al generar el mensaje. "
        "Por favor, inténtelo de nuevo."
    )


class IncompleteExtraction(SosgenError):
    """Required description fields came back empty."""

    code = "incomplete_extraction"

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        labels = ", ".join(FIELD_LABELS.get(f, f) for f in self.missing_fields)
        super().__init__(
            f"Falta información. La IA no pudo extraer: {labels}. "
            "Por favor, sea más específico en su descripción."
        )
