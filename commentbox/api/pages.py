"""HTML pages and admin secret setup.

Page rendering is delegated to the Jinja templates; these views only decide
who may see a page and what data it receives.
"""

import logging
from typing import Any
from urllib.parse import urlencode

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, render_template, request
from spectree import Response as SpectreeResponse

from commentbox.config import Settings
from commentbox.schemas.comment import CommentAdminSchema
from commentbox.schemas.error import ErrorResponseSchema
from commentbox.schemas.setup import SetupRequestSchema, SetupResponseSchema
from commentbox.services.admin_secret_service import AdminSecretService
from commentbox.services.comment_service import CommentService
from commentbox.services.container import ServiceContainer
from commentbox.utils.auth import get_supplied_secret
from commentbox.utils.error_handling import handle_api_errors
from commentbox.utils.spectree_config import api

logger = logging.getLogger(__name__)

pages_bp = Blueprint("pages", __name__)

FALLBACK_TEXT = "Page Comments API"


@pages_bp.route("/", methods=["GET"])
def index() -> Any:
    """Plain-text service banner."""
    return FALLBACK_TEXT, 200, {"Content-Type": "text/plain; charset=utf-8"}


@pages_bp.route("/setup", methods=["GET"])
def setup_form() -> Any:
    """Render the admin secret setup form."""
    return render_template("setup.html")


@pages_bp.route("/setup", methods=["POST"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=SetupResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_401=ErrorResponseSchema,
        HTTP_500=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def update_admin_secret(
    admin_secret_service: AdminSecretService = Provide[ServiceContainer.admin_secret_service],
    config: Settings = Provide[ServiceContainer.config],
) -> Any:
    """Set or rotate the admin secret.

    The current secret is required once a secret is configured; on first
    boot any caller may set the initial secret.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}

    data = SetupRequestSchema.model_validate(body)
    current_secret = data.current_secret if isinstance(data.current_secret, str) else None

    admin_secret_service.update(current_secret, data.new_secret)

    base_url = (config.BASEURL or request.host_url).rstrip("/")
    admin_url = f"{base_url}/admin?{urlencode({'secret': data.new_secret})}"

    return SetupResponseSchema(
        success=True,
        message="Admin secret updated successfully",
        admin_url=admin_url,
    ).model_dump(by_alias=True)


@pages_bp.route("/admin", methods=["GET"])
@handle_api_errors
@inject
def admin_page(
    comment_service: CommentService = Provide[ServiceContainer.comment_service],
    admin_secret_service: AdminSecretService = Provide[ServiceContainer.admin_secret_service],
) -> Any:
    """Render the moderation page listing every comment.

    Unauthorized callers get a plain-text 401 rather than the JSON envelope.
    """
    if not admin_secret_service.is_authorized(get_supplied_secret()):
        logger.warning("Rejected admin page request")
        return "Unauthorized", 401, {"Content-Type": "text/plain; charset=utf-8"}

    comments = [
        CommentAdminSchema.model_validate(c) for c in comment_service.list_all_comments()
    ]

    return render_template("admin.html", comments=comments, secret=get_supplied_secret())


@pages_bp.route("/comment-widget", methods=["GET"])
def comment_widget() -> Any:
    """Render the embeddable widget for the page given in page_url."""
    return render_template("widget.html", page_url=request.args.get("page_url", ""))
