"""Settings service for persistent key-value storage."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from commentbox.models.setting import Setting

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for managing persistent application settings.

    Provides simple get/set interface for key-value settings stored in the database.
    Keys are uppercase like environment variables.
    Settings do not need to pre-exist - get() returns the default if not found.
    """

    def __init__(self, db: Session) -> None:
        """Initialize settings service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a setting value.

        Args:
            key: Setting key (will be uppercased)
            default: Default value if setting doesn't exist

        Returns:
            Setting value or default
        """
        key = key.upper()
        stmt = select(Setting).where(Setting.key == key)
        setting = self.db.scalars(stmt).first()

        if setting is None:
            return default

        return setting.value

    def set(self, key: str, value: str) -> None:
        """Set a setting value, overwriting any previous value.

        Args:
            key: Setting key (will be uppercased)
            value: Setting value
        """
        key = key.upper()
        stmt = select(Setting).where(Setting.key == key)
        setting = self.db.scalars(stmt).first()

        if setting is None:
            self.db.add(Setting(key=key, value=value))
            logger.debug("Created setting %s", key)
        else:
            setting.value = value
            logger.debug("Updated setting %s", key)

        self.db.flush()
