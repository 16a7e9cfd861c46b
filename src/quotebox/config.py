"""
Configuration settings for QuoteBox.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "QuoteBox"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # === OpenRouter ===
    OPENROUTER_API_KEY: str  # Required, the process refuses to start without it
    OPENROUTER_MODEL: str = "openrouter/auto"
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"

    # === Database ===
    DATABASE_URL: Optional[str] = None  # Takes precedence over the DB_* parts
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "quoteuser"
    DB_PASS: str = "quotepw"
    DB_NAME: str = "quotedb"
    DB_SSLMODE: str = "disable"
    DB_POOL_SIZE: int = 10  # Idle connections kept in the pool
    DB_MAX_OVERFLOW: int = 90  # pool_size + max_overflow = max open connections
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_ECHO: bool = False

    # === Frontend ===
    FRONTEND_DIR: Optional[str] = None  # Defaults to the packaged frontend
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("OPENROUTER_API_KEY")
    @classmethod
    def api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("OPENROUTER_API_KEY environment variable is required")
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Raises:
        pydantic.ValidationError: required configuration is missing
    """
    return Settings()
