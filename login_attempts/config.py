from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from login_attempts.utils.date_utils import parse_duration


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("attempts_default_duration")
    @classmethod
    def validate_default_duration(cls, v: str) -> str:
        """Fail fast on a duration the store would reject at runtime."""
        parse_duration(v)
        return v

    # Database
    database_url: str = "postgresql+asyncpg://localhost:5432/login_attempts"

    # Throttling
    attempts_default_limit: int = Field(default=5, ge=1)
    attempts_default_duration: str = "+15 minutes"
    attempts_purge_expired_on_check: bool = False
    attempts_fail_closed: bool = True

    # App
    app_env: str = "development"
    log_level: str = "INFO"


settings = Settings()
