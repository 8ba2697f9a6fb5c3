"""SQLAlchemy models for the comment service."""

from commentbox.models.comment import Comment, CommentStatus
from commentbox.models.setting import Setting

__all__ = ["Comment", "CommentStatus", "Setting"]
