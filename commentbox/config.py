"""Configuration management using Pydantic settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Project root directory (parent of commentbox/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Last-resort admin secret when neither the settings table nor ADMIN_SECRET_KEY
# provides one. Deliberately unlike anything an operator would choose.
DEVELOPMENT_ADMIN_SECRET = "INSECURE-DEVELOPMENT-ADMIN-SECRET-CHANGE-ME"

MIN_ADMIN_SECRET_LENGTH = 8


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Flask settings
    FLASK_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Database settings
    DATABASE_URL: str = Field(
        default="sqlite:///comments.db",
        description="SQLAlchemy connection string for the comment store",
    )

    # Admin secret fallback, used when no secret has been stored via /setup
    ADMIN_SECRET_KEY: str | None = Field(
        default=None,
        description="Static admin secret used until one is stored in the database",
    )

    # Public base URL, used to build the admin link returned by /setup
    BASEURL: str | None = Field(
        default=None,
        description="Public base URL (e.g., https://comments.example.com)",
    )

    # CORS settings
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Internal override for test fixtures (not set via env)
    _engine_options_override: dict[str, Any] | None = PrivateAttr(default=None)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.FLASK_ENV == "production" or not self.DEBUG

    @property
    def is_testing(self) -> bool:
        """Check if the application is running in testing mode."""
        return self.FLASK_ENV == "testing"

    def validate_production_config(self) -> None:
        """Validate that configuration is safe for production.

        Raises:
            ConfigurationError: If settings are insecure
        """
        errors: list[str] = []

        if self.ADMIN_SECRET_KEY is not None:
            if self.ADMIN_SECRET_KEY == DEVELOPMENT_ADMIN_SECRET:
                errors.append(
                    "ADMIN_SECRET_KEY must not be set to the development default"
                )
            elif len(self.ADMIN_SECRET_KEY) < MIN_ADMIN_SECRET_LENGTH:
                errors.append(
                    f"ADMIN_SECRET_KEY must be at least {MIN_ADMIN_SECRET_LENGTH} characters"
                )

        if self.is_production and not self.CORS_ORIGINS:
            errors.append("CORS_ORIGINS must not be empty")

        if self.is_production and self.DATABASE_URL.startswith("sqlite"):
            logger.warning("Running in production with SQLite database %s", self.DATABASE_URL)

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """SQLAlchemy database URI."""
        return self.DATABASE_URL

    @property
    def SQLALCHEMY_TRACK_MODIFICATIONS(self) -> bool:
        """Disable SQLAlchemy track modifications."""
        return False

    @property
    def SQLALCHEMY_ENGINE_OPTIONS(self) -> dict[str, Any]:
        """SQLAlchemy engine options with connection pool configuration."""
        # Allow test fixtures to fully override engine options (e.g., for SQLite)
        if self._engine_options_override is not None:
            return self._engine_options_override
        if self.DATABASE_URL.startswith("sqlite"):
            return {}
        return {
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_pre_ping": True,  # Verify connections before use
        }

    def set_engine_options_override(self, options: dict[str, Any]) -> None:
        """Override engine options (for test fixtures using SQLite)."""
        self._engine_options_override = options


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
