"""Tests for the configuration module."""

import os
from unittest.mock import patch

import pytest

from commentbox import create_app
from commentbox.config import DEVELOPMENT_ADMIN_SECRET, ConfigurationError, Settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self):
        """Settings have usable development defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.FLASK_ENV == "development"
        assert settings.DATABASE_URL == "sqlite:///comments.db"
        assert settings.ADMIN_SECRET_KEY is None
        assert settings.BASEURL is None
        assert settings.CORS_ORIGINS == ["*"]
        assert settings.is_production is False

    def test_loads_from_environment(self):
        """Settings load values from environment variables."""
        with patch.dict(os.environ, {
            "FLASK_ENV": "production",
            "DEBUG": "False",
            "DATABASE_URL": "postgresql://user:pass@db/comments",
            "ADMIN_SECRET_KEY": "from-environment",
            "BASEURL": "https://comments.example.com",
            "CORS_ORIGINS": '["https://blog.example.com"]',
        }, clear=False):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.is_production is True
        assert settings.DATABASE_URL == "postgresql://user:pass@db/comments"
        assert settings.ADMIN_SECRET_KEY == "from-environment"
        assert settings.BASEURL == "https://comments.example.com"
        assert settings.CORS_ORIGINS == ["https://blog.example.com"]

    def test_sqlalchemy_options(self):
        """SQLite gets no pool options; other databases get pooling."""
        sqlite = Settings(_env_file=None, DATABASE_URL="sqlite://")  # type: ignore[call-arg]
        postgres = Settings(  # type: ignore[call-arg]
            _env_file=None, DATABASE_URL="postgresql://user:pass@db/comments"
        )

        assert sqlite.SQLALCHEMY_DATABASE_URI == "sqlite://"
        assert sqlite.SQLALCHEMY_ENGINE_OPTIONS == {}
        assert postgres.SQLALCHEMY_ENGINE_OPTIONS["pool_pre_ping"] is True

    def test_engine_options_override(self):
        """An explicit override replaces computed engine options."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        settings.set_engine_options_override({"echo": True})

        assert settings.SQLALCHEMY_ENGINE_OPTIONS == {"echo": True}


class TestValidateProductionConfig:
    """Tests for configuration validation at startup."""

    def test_valid_configuration(self):
        """A strong secret and explicit origins pass."""
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            FLASK_ENV="production",
            DEBUG=False,
            ADMIN_SECRET_KEY="a-strong-admin-secret",
            CORS_ORIGINS=["https://blog.example.com"],
        )

        settings.validate_production_config()

    def test_rejects_development_default(self):
        """The development default may not be configured explicitly."""
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, ADMIN_SECRET_KEY=DEVELOPMENT_ADMIN_SECRET
        )

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        assert "development default" in str(exc_info.value)

    def test_rejects_short_secret(self):
        """A configured secret must be at least 8 characters."""
        settings = Settings(_env_file=None, ADMIN_SECRET_KEY="short")  # type: ignore[call-arg]

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        assert "at least 8 characters" in str(exc_info.value)

    def test_rejects_empty_cors_origins_in_production(self):
        """Production needs at least one allowed origin."""
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, FLASK_ENV="production", DEBUG=False, CORS_ORIGINS=[]
        )

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        assert "CORS_ORIGINS" in str(exc_info.value)

    def test_create_app_rejects_invalid_config(self):
        """The application refuses to start with insecure configuration."""
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, DATABASE_URL="sqlite://", ADMIN_SECRET_KEY="short"
        )

        with pytest.raises(ConfigurationError):
            create_app(settings)
