"""Field-by-field validation of comment submissions."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any
from urllib.parse import urlsplit

AUTHOR_NAME_MAX_LENGTH = 100
COMMENT_CONTENT_MAX_LENGTH = 1000

ALLOWED_URL_SCHEMES = ("http", "https")


class ViolationKind(StrEnum):
    """Category of a failed validation rule."""

    MISSING_FIELD = "missing_field"
    INVALID_TYPE = "invalid_type"
    INVALID_FORMAT = "invalid_format"
    EMPTY = "empty"
    TOO_LONG = "too_long"


@dataclass(frozen=True)
class Violation:
    """A single violated rule for one field."""

    kind: ViolationKind
    field: str
    message: str


def is_valid_url(value: Any) -> bool:
    """Check that value is an absolute http(s) URL with a host."""
    if not isinstance(value, str):
        return False

    try:
        parts = urlsplit(value.strip())
        hostname = parts.hostname
    except ValueError:
        return False

    return parts.scheme.lower() in ALLOWED_URL_SCHEMES and bool(hostname)


def _validate_text_field(payload: dict[str, Any], field: str, max_length: int) -> Violation | None:
    value = payload.get(field)

    if value is None or value == "":
        return Violation(ViolationKind.MISSING_FIELD, field, f"{field} is required")

    if not isinstance(value, str):
        return Violation(ViolationKind.INVALID_TYPE, field, f"{field} must be a string")

    # Limits apply to the trimmed raw input, not the escaped form
    trimmed = value.strip()
    if not trimmed:
        return Violation(ViolationKind.EMPTY, field, f"{field} cannot be empty")

    if len(trimmed) > max_length:
        return Violation(
            ViolationKind.TOO_LONG,
            field,
            f"{field} must be {max_length} characters or less",
        )

    return None


def validate_comment_submission(payload: Any) -> list[Violation]:
    """Validate a comment submission and collect every violated rule.

    Args:
        payload: Decoded JSON request body

    Returns:
        List of violations, empty when the submission is valid
    """
    if not isinstance(payload, dict):
        return [
            Violation(
                ViolationKind.INVALID_FORMAT,
                "body",
                "Request body must be a JSON object",
            )
        ]

    violations: list[Violation] = []

    page_url = payload.get("page_url")
    if page_url is None or page_url == "":
        violations.append(
            Violation(ViolationKind.MISSING_FIELD, "page_url", "page_url is required")
        )
    elif not is_valid_url(page_url):
        violations.append(
            Violation(ViolationKind.INVALID_FORMAT, "page_url", "Invalid page_url format")
        )

    for field, max_length in (
        ("author_name", AUTHOR_NAME_MAX_LENGTH),
        ("comment_content", COMMENT_CONTENT_MAX_LENGTH),
    ):
        violation = _validate_text_field(payload, field, max_length)
        if violation is not None:
            violations.append(violation)

    return violations
