from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Generation provider; a missing key is reported per request, not at startup
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    openai_timeout: float = 30.0

    # History store; in-memory when no Redis URL is given
    redis_url: Optional[str] = None
    history_ttl: Optional[int] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
