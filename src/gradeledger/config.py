"""
Application Configuration

Uses Pydantic Settings for type-safe environment variable management.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # ========================================================================
    # APPLICATION
    # ========================================================================

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    DEBUG: bool = False

    # ========================================================================
    # DATABASE
    # ========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./gradeledger.db",
        description="SQLAlchemy async connection string",
    )

    # ========================================================================
    # LEDGER
    # ========================================================================

    LEDGER_OWNER: str = Field(
        default="registrar",
        description="Identity allowed to authorize and deauthorize other callers",
    )

    CALLER_HEADER: str = Field(
        default="X-Caller-Identity",
        description="HTTP header carrying the identity of the calling user",
    )

    @field_validator("LEDGER_OWNER")
    @classmethod
    def validate_owner(cls: type[Settings], v: str) -> str:  # noqa: ARG003
        """Owner identity must not be blank."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("LEDGER_OWNER cannot be blank")
        return cleaned

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def is_local(self) -> bool:
        """Check if running locally."""
        return self.ENVIRONMENT == "local"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


# Global settings instance
settings = Settings()
