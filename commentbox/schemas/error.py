"""Error response schema."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code")
