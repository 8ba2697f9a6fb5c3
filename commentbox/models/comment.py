"""Comment model for page-scoped visitor comments."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from commentbox.extensions import db


class CommentStatus(StrEnum):
    """Moderation status of a comment.

    APPROVED: Visible to public readers (every comment is created approved)
    """

    APPROVED = "approved"


class Comment(db.Model):  # type: ignore[name-defined]
    """SQLAlchemy model for a single comment attached to a page URL.

    Text fields are stored HTML-escaped. Rows are never updated; deletion is
    a hard delete.
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("idx_comments_page_url", "page_url"),
        Index("idx_comments_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    # Surrogate primary key (auto-increment, never reused)
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Partition key for public reads
    page_url: Mapped[str] = mapped_column(Text, nullable=False)

    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    comment_content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CommentStatus.APPROVED.value,
        server_default=CommentStatus.APPROVED.value,
    )

    @property
    def status_enum(self) -> CommentStatus:
        """Get status as enum."""
        return CommentStatus(self.status)

    def __repr__(self) -> str:
        """Return string representation of Comment."""
        return f"<Comment(id={self.id}, page_url='{self.page_url}', status='{self.status}')>"
