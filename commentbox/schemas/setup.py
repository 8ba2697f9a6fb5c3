"""Admin secret setup schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SetupRequestSchema(BaseModel):
    """Request body for POST /setup."""

    model_config = ConfigDict(populate_by_name=True)

    current_secret: Any = Field(None, alias="currentSecret", description="Current admin secret")
    new_secret: Any = Field(None, alias="newSecret", description="New admin secret, at least 8 characters")


class SetupResponseSchema(BaseModel):
    """Response for POST /setup."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    admin_url: str = Field(..., alias="adminUrl", description="Link to the moderation page")
