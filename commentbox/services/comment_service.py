"""Comment service for page-scoped comment storage."""

import logging

from prometheus_client import Counter
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from commentbox.exceptions import RecordNotFoundException, StorageException
from commentbox.models.comment import Comment, CommentStatus

logger = logging.getLogger(__name__)

COMMENTS_CREATED_TOTAL = Counter(
    "commentbox_comments_created_total",
    "Comments successfully stored",
)
COMMENTS_DELETED_TOTAL = Counter(
    "commentbox_comments_deleted_total",
    "Comments removed by moderation",
)


class CommentService:
    """Service for reading, creating and deleting comments.

    Every operation is independent; none spans more than one statement
    that mutates data. Database failures surface as StorageException.
    """

    def __init__(self, db: Session) -> None:
        """Initialize service with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def create_comment(self, page_url: str, author_name: str, comment_content: str) -> Comment:
        """Store a new approved comment.

        Arguments must already be validated and sanitized.

        Args:
            page_url: Page the comment belongs to
            author_name: Display name of the author
            comment_content: Comment body

        Returns:
            The persisted Comment, including server-assigned id and created_at

        Raises:
            StorageException: If the insert fails
        """
        comment = Comment(
            page_url=page_url,
            author_name=author_name,
            comment_content=comment_content,
            status=CommentStatus.APPROVED.value,
        )

        try:
            self.db.add(comment)
            self.db.flush()
            self.db.refresh(comment)
        except SQLAlchemyError as e:
            logger.error("Failed to insert comment for %s: %s", page_url, e, exc_info=True)
            raise StorageException("Failed to create comment", str(e)) from e

        COMMENTS_CREATED_TOTAL.inc()
        logger.info("Created comment %d for %s", comment.id, page_url)
        return comment

    def list_comments_for_page(self, page_url: str) -> list[Comment]:
        """List approved comments for a page, oldest first.

        Args:
            page_url: Page to list comments for

        Returns:
            Comments ordered by created_at ascending, ties by id ascending

        Raises:
            StorageException: If the query fails
        """
        stmt = (
            select(Comment)
            .where(
                Comment.page_url == page_url,
                Comment.status == CommentStatus.APPROVED.value,
            )
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )

        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error("Failed to list comments for %s: %s", page_url, e, exc_info=True)
            raise StorageException("Failed to retrieve comments", str(e)) from e

    def list_all_comments(self) -> list[Comment]:
        """List every comment regardless of status, newest first.

        Returns:
            Comments ordered by created_at descending, ties by id descending

        Raises:
            StorageException: If the query fails
        """
        stmt = select(Comment).order_by(Comment.created_at.desc(), Comment.id.desc())

        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error("Failed to list all comments: %s", e, exc_info=True)
            raise StorageException("Failed to retrieve comments", str(e)) from e

    def comment_exists(self, comment_id: int) -> bool:
        """Check whether a comment with the given id exists."""
        stmt = select(Comment.id).where(Comment.id == comment_id)

        try:
            return self.db.scalars(stmt).first() is not None
        except SQLAlchemyError as e:
            logger.error("Failed to look up comment %d: %s", comment_id, e, exc_info=True)
            raise StorageException("Failed to delete comment", str(e)) from e

    def delete_comment(self, comment_id: int) -> None:
        """Hard-delete a comment.

        Callers should check comment_exists() first; a delete that removes no
        row is still reported as not found.

        Args:
            comment_id: ID of the comment to delete

        Raises:
            RecordNotFoundException: If no comment with that id exists
            StorageException: If the delete fails
        """
        stmt = delete(Comment).where(Comment.id == comment_id)

        try:
            result = self.db.execute(stmt)
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to delete comment %d: %s", comment_id, e, exc_info=True)
            raise StorageException("Failed to delete comment", str(e)) from e

        if result.rowcount == 0:
            raise RecordNotFoundException("Comment", str(comment_id))

        COMMENTS_DELETED_TOTAL.inc()
        logger.info("Deleted comment %d", comment_id)
