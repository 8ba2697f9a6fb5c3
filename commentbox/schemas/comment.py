"""Comment schemas for API request/response serialization."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentSchema(BaseModel):
    """Public view of a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Comment ID")
    page_url: str = Field(..., description="Page the comment belongs to")
    author_name: str = Field(..., description="HTML-escaped author display name")
    comment_content: str = Field(..., description="HTML-escaped comment body")
    created_at: datetime = Field(..., description="Creation timestamp")


class CommentAdminSchema(CommentSchema):
    """Moderation view of a comment, including status."""

    status: str = Field(..., description="Moderation status")


class CommentListResponseSchema(BaseModel):
    """Response for GET /api/comments."""

    comments: list[CommentSchema]
    count: int


class CommentAdminListResponseSchema(BaseModel):
    """Response for GET /api/comments/all."""

    comments: list[CommentAdminSchema]
    count: int


class CommentCreateResponseSchema(BaseModel):
    """Response for POST /api/comments."""

    success: bool
    comment: CommentSchema


class CommentDeleteResponseSchema(BaseModel):
    """Response for DELETE /api/comments/<id>."""

    success: bool
    message: str
