"""Database connectivity and Alembic migration helpers.

All functions require an active Flask application context.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Connection, MetaData, text
from sqlalchemy.exc import SQLAlchemyError

from commentbox.extensions import db

logger = logging.getLogger(__name__)

# Project root directory (parent of commentbox/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ALEMBIC_DIR = _PROJECT_ROOT / "alembic"


def _get_alembic_config(connection: Connection | None = None) -> Config:
    """Build an Alembic config pointing at the bundled migration scripts.

    When a connection is given, env.py runs migrations on it instead of
    creating its own engine.
    """
    config = Config()
    config.set_main_option("script_location", str(_ALEMBIC_DIR))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def check_db_connection() -> bool:
    """Check whether the database accepts connections."""
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning("Database connection check failed: %s", e)
        return False


def get_current_revision() -> str | None:
    """Get the migration revision the database is currently at."""
    with db.engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def get_pending_migrations() -> list[str]:
    """List revisions not yet applied, oldest first."""
    script = ScriptDirectory.from_config(_get_alembic_config())
    current = get_current_revision()

    pending: list[str] = []
    # walk_revisions yields from head down to base
    for revision in script.walk_revisions():
        if revision.revision == current:
            break
        pending.append(revision.revision)

    return list(reversed(pending))


def upgrade_database(recreate: bool = False) -> list[tuple[str, str]]:
    """Apply all pending migrations.

    Args:
        recreate: Drop every table (including alembic_version) first

    Returns:
        List of (revision, description) tuples that were applied
    """
    if recreate:
        with db.engine.begin() as connection:
            metadata = MetaData()
            metadata.reflect(bind=connection)
            metadata.drop_all(bind=connection)
        logger.warning("Dropped all tables before upgrade")

    script = ScriptDirectory.from_config(_get_alembic_config())
    pending = get_pending_migrations()

    with db.engine.begin() as connection:
        command.upgrade(_get_alembic_config(connection), "head")

    applied = [(rev, script.get_revision(rev).doc or "") for rev in pending]
    for rev, desc in applied:
        logger.info("Applied migration %s: %s", rev, desc)

    return applied
