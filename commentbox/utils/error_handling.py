"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import current_app, jsonify
from flask.wrappers import Response

from commentbox.exceptions import (
    AuthenticationException,
    BusinessLogicException,
    RecordNotFoundException,
    StorageException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def build_error_response(
    error: str,
    code: str | None = None,
    status_code: int = 400,
) -> tuple[Response, int]:
    """Build the JSON error envelope with an optional error code."""
    response_data: dict[str, Any] = {"error": error}

    if code:
        response_data["code"] = code

    return jsonify(response_data), status_code


def mark_request_failed() -> None:
    """Flag the request session so teardown rolls back instead of committing."""
    container = getattr(current_app, "container", None)
    if container is None:
        return
    db_session = container.db_session()
    db_session.info["needs_rollback"] = True


def handle_api_errors(
    func: Callable[..., Any],
) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Maps domain exceptions to status codes. Client errors are logged at
    warning level; anything else is logged with a stack trace and returned
    as a generic 500 without exception detail.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationException as e:
            mark_request_failed()
            logger.warning("Validation failed in %s: %s", func.__name__, e.message)
            return build_error_response(e.message, code=e.error_code, status_code=400)

        except AuthenticationException as e:
            mark_request_failed()
            logger.warning("Unauthorized request in %s", func.__name__)
            return build_error_response(e.message, code=e.error_code, status_code=401)

        except RecordNotFoundException as e:
            mark_request_failed()
            logger.warning("%s %s not found in %s", e.resource_type, e.identifier, func.__name__)
            return build_error_response(e.message, code=e.error_code, status_code=404)

        except StorageException as e:
            # Cause is for operators only; the client sees the generic message
            mark_request_failed()
            logger.error("Storage failure in %s: %s", func.__name__, e.cause, exc_info=True)
            return build_error_response(e.message, code=e.error_code, status_code=500)

        except BusinessLogicException as e:
            # Generic business logic exception (fallback for custom exceptions)
            mark_request_failed()
            logger.warning("Business logic error in %s: %s", func.__name__, e.message)
            return build_error_response(e.message, code=e.error_code, status_code=400)

        except Exception as e:
            mark_request_failed()
            logger.error("Exception in %s: %s", func.__name__, str(e), exc_info=True)
            return build_error_response("Internal server error", status_code=500)

    return wrapper
