"""Setting model for persistent key-value storage."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from commentbox.extensions import db


class Setting(db.Model):  # type: ignore[name-defined]
    """Key-value setting storage for application state.

    Holds the rotated admin secret under ADMIN_SECRET.
    Keys are uppercase like environment variables.
    """

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Setting key={self.key}>"
