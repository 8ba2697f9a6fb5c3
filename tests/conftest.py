"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from commentbox import create_app
from commentbox.config import Settings
from commentbox.database import upgrade_database
from commentbox.models.comment import Comment
from commentbox.services.container import ServiceContainer

TEST_ADMIN_SECRET = "test-admin-secret"
TEST_BASEURL = "http://comments.test"
SAMPLE_PAGE_URL = "https://blog.example.com/posts/hello-world"


def _build_test_settings(**overrides: Any) -> Settings:
    """Construct base Settings object for tests.

    Environment variables and .env files are ignored; every value the
    application depends on is passed explicitly.
    """
    values: dict[str, Any] = {
        "FLASK_ENV": "testing",
        "DEBUG": True,
        "DATABASE_URL": "sqlite://",
        "ADMIN_SECRET_KEY": TEST_ADMIN_SECRET,
        "BASEURL": TEST_BASEURL,
        "CORS_ORIGINS": ["*"],
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def _bind_settings_to_connection(settings: Settings, conn: sqlite3.Connection) -> Settings:
    """Configure settings to use the given SQLite connection through a static pool."""
    settings.set_engine_options_override(
        {
            "poolclass": StaticPool,
            "creator": lambda: conn,
        }
    )
    return settings


@pytest.fixture(scope="session")
def template_connection() -> Generator[sqlite3.Connection, None, None]:
    """Create a template SQLite database once and apply migrations."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)

    settings = _bind_settings_to_connection(_build_test_settings(), conn)

    template_app = create_app(settings)
    with template_app.app_context():
        upgrade_database(recreate=True)

    yield conn

    conn.close()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with a configured fallback admin secret."""
    return _build_test_settings()


@pytest.fixture
def app(test_settings: Settings, template_connection: sqlite3.Connection) -> Generator[Flask, None, None]:
    """Create Flask app for testing using a fresh copy of the template database."""
    clone_conn = sqlite3.connect(":memory:", check_same_thread=False)
    template_connection.backup(clone_conn)

    settings = _bind_settings_to_connection(test_settings, clone_conn)

    app = create_app(settings)

    try:
        yield app
    finally:
        clone_conn.close()


@pytest.fixture
def client(app: Flask) -> Any:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def container(app: Flask) -> ServiceContainer:
    """Access to the DI container for testing."""
    return app.container


@pytest.fixture
def session(app: Flask, container: ServiceContainer) -> Generator[Session, None, None]:
    """Provide the container's database session for a test, committing afterwards."""
    with app.app_context():
        session = container.db_session()

        exc = None
        try:
            yield session
        except Exception as e:
            exc = e

        if exc:
            session.rollback()
        else:
            session.commit()
        session.close()

        container.db_session.reset()


@pytest.fixture
def make_comment(app: Flask, container: ServiceContainer) -> Any:
    """Factory fixture for creating committed comment records in tests.

    Usage:
        comment = make_comment(author_name="Alice", comment_content="Nice post")
    """

    def _make(
        page_url: str = SAMPLE_PAGE_URL,
        author_name: str = "Alice",
        comment_content: str = "Great article!",
    ) -> Comment:
        with app.app_context():
            session = container.db_session()
            try:
                comment = container.comment_service().create_comment(
                    page_url=page_url,
                    author_name=author_name,
                    comment_content=comment_content,
                )
                session.commit()
            finally:
                session.close()
                container.db_session.reset()
        return comment

    return _make


@pytest.fixture
def valid_submission() -> dict[str, Any]:
    """A comment submission that passes validation."""
    return {
        "page_url": SAMPLE_PAGE_URL,
        "author_name": "Alice",
        "comment_content": "Great article!",
    }


@pytest.fixture
def admin_secret() -> str:
    """The fallback admin secret configured in test settings."""
    return TEST_ADMIN_SECRET


@pytest.fixture
def page_url() -> str:
    """A well-formed page URL for comment submissions."""
    return SAMPLE_PAGE_URL
