"""Admin secret checks for moderation endpoints."""

import logging

from flask import request

from commentbox.exceptions import AuthenticationException
from commentbox.services.admin_secret_service import AdminSecretService

logger = logging.getLogger(__name__)


def get_supplied_secret() -> str | None:
    """Get the admin secret supplied in the request query string."""
    return request.args.get("secret")


def require_admin_secret(admin_secret_service: AdminSecretService) -> None:
    """Reject the current request unless it carries the admin secret.

    Raises:
        AuthenticationException: If the secret is missing or wrong
    """
    if not admin_secret_service.is_authorized(get_supplied_secret()):
        logger.warning("Rejected admin request to %s %s", request.method, request.path)
        raise AuthenticationException()
