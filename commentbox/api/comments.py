"""Comment API endpoints."""

import re
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from commentbox.exceptions import RecordNotFoundException, ValidationException
from commentbox.schemas.comment import (
    CommentAdminListResponseSchema,
    CommentAdminSchema,
    CommentCreateResponseSchema,
    CommentDeleteResponseSchema,
    CommentListResponseSchema,
    CommentSchema,
)
from commentbox.schemas.error import ErrorResponseSchema
from commentbox.services.admin_secret_service import AdminSecretService
from commentbox.services.comment_service import CommentService
from commentbox.services.container import ServiceContainer
from commentbox.utils.auth import require_admin_secret
from commentbox.utils.error_handling import handle_api_errors
from commentbox.utils.sanitize import sanitize_input
from commentbox.utils.spectree_config import api
from commentbox.utils.validation import is_valid_url, validate_comment_submission

comments_bp = Blueprint("comments", __name__, url_prefix="/comments")

COMMENT_ID_PATTERN = re.compile(r"^\d+$")


@comments_bp.route("", methods=["GET"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=CommentListResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_500=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def list_comments(
    comment_service: CommentService = Provide[ServiceContainer.comment_service],
) -> Any:
    """List approved comments for a page, oldest first."""
    page_url = request.args.get("page_url")

    if not page_url:
        raise ValidationException("page_url parameter is required")

    if not is_valid_url(page_url):
        raise ValidationException("Invalid page_url format")

    # Stored page URLs are sanitized, so the lookup key must be too
    comments = comment_service.list_comments_for_page(sanitize_input(page_url))

    return CommentListResponseSchema(
        comments=[CommentSchema.model_validate(c) for c in comments],
        count=len(comments),
    ).model_dump(mode="json")


@comments_bp.route("", methods=["POST"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_201=CommentCreateResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_500=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def create_comment(
    comment_service: CommentService = Provide[ServiceContainer.comment_service],
) -> Any:
    """Create a new comment.

    Every violated rule is reported in one 400 response. Length limits are
    checked on the trimmed input before HTML escaping.
    """
    payload = request.get_json(silent=True)

    violations = validate_comment_submission(payload)
    if violations:
        raise ValidationException.from_violations(violations)

    comment = comment_service.create_comment(
        page_url=sanitize_input(payload["page_url"]),
        author_name=sanitize_input(payload["author_name"]),
        comment_content=sanitize_input(payload["comment_content"]),
    )

    return CommentCreateResponseSchema(
        success=True,
        comment=CommentSchema.model_validate(comment),
    ).model_dump(mode="json"), 201


@comments_bp.route("/all", methods=["GET"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=CommentAdminListResponseSchema,
        HTTP_401=ErrorResponseSchema,
        HTTP_500=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def list_all_comments(
    comment_service: CommentService = Provide[ServiceContainer.comment_service],
    admin_secret_service: AdminSecretService = Provide[ServiceContainer.admin_secret_service],
) -> Any:
    """List every comment for moderation, newest first."""
    require_admin_secret(admin_secret_service)

    comments = comment_service.list_all_comments()

    return CommentAdminListResponseSchema(
        comments=[CommentAdminSchema.model_validate(c) for c in comments],
        count=len(comments),
    ).model_dump(mode="json")


@comments_bp.route("/<comment_id>", methods=["DELETE"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=CommentDeleteResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_401=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
        HTTP_500=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def delete_comment(
    comment_id: str,
    comment_service: CommentService = Provide[ServiceContainer.comment_service],
    admin_secret_service: AdminSecretService = Provide[ServiceContainer.admin_secret_service],
) -> Any:
    """Delete a comment. Authorization is checked before the id is looked up."""
    require_admin_secret(admin_secret_service)

    if not COMMENT_ID_PATTERN.match(comment_id):
        raise ValidationException("Invalid comment ID")

    comment_pk = int(comment_id)
    if not comment_service.comment_exists(comment_pk):
        raise RecordNotFoundException("Comment", comment_id)

    comment_service.delete_comment(comment_pk)

    return CommentDeleteResponseSchema(
        success=True,
        message="Comment deleted successfully",
    ).model_dump()
