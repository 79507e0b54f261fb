from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model using camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Extraction / Composition Models ---

class ExtractedData(CamelModel):
    """Fields pulled out of the operator's free-text description."""
    station_name: Optional[str] = None
    mrcc: Optional[str] = None
    spanish_description: Optional[str] = None
    english_description: Optional[str] = None


class GeneratedMessages(BaseModel):
    """The composed MAYDAY RELAY pair."""
    model_config = ConfigDict(frozen=True)

    es: str
    en: str


# --- Request/Response Models ---

class GenerateMessageRequest(CamelModel):
    """Request body for POST /api/generate-message."""
    natural_input: str = Field(min_length=1)


class ErrorResponse(CamelModel):
    """Error body returned on failures."""
    error: str
    code: Optional[str] = None
    missing_fields: Optional[list[str]] = None


# --- Storage Models ---

class InsertMessageHistory(CamelModel):
    """Request body for POST /api/history."""
    natural_input: str
    spanish_message: str
    english_message: str
    is_favorite: bool = False


class MessageHistory(InsertMessageHistory):
    """History record."""
    id: str
    created_at: datetime


class InsertFavorite(CamelModel):
    """Request body for POST /api/favorites."""
    title: str
    natural_input: str
    spanish_message: str
    english_message: str


class Favorite(InsertFavorite):
    """Saved favorite template."""
    id: str
    created_at: datetime


class DeleteResponse(BaseModel):
    """Response body for DELETE /api/favorites/{id}."""
    deleted: bool
