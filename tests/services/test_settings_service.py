"""Tests for SettingsService."""

from flask import Flask

from commentbox.services.container import ServiceContainer


class TestSettingsService:
    """Tests for the key-value settings store."""

    def test_get_missing_returns_default(self, app: Flask, container: ServiceContainer) -> None:
        """Test that a missing key returns the default."""
        with app.app_context():
            service = container.settings_service()

            assert service.get("MISSING") is None
            assert service.get("MISSING", "fallback") == "fallback"

    def test_set_then_get(self, app: Flask, container: ServiceContainer) -> None:
        """Test that a stored value can be read back."""
        with app.app_context():
            service = container.settings_service()
            service.set("GREETING", "hello")

            assert service.get("GREETING") == "hello"

    def test_set_overwrites(self, app: Flask, container: ServiceContainer) -> None:
        """Test that setting an existing key replaces its value."""
        with app.app_context():
            service = container.settings_service()
            service.set("GREETING", "hello")
            service.set("GREETING", "goodbye")

            assert service.get("GREETING") == "goodbye"

    def test_keys_are_case_insensitive(self, app: Flask, container: ServiceContainer) -> None:
        """Test that keys are normalized to uppercase."""
        with app.app_context():
            service = container.settings_service()
            service.set("greeting", "hello")

            assert service.get("GREETING") == "hello"
            assert service.get("Greeting") == "hello"
