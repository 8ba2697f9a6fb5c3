"""Domain-specific exceptions with user-ready messages for the comment service."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commentbox.utils.validation import Violation


class BusinessLogicException(Exception):
    """Base exception class for business logic errors.

    All business logic exceptions include user-ready messages that can be
    returned directly to the client without further message construction.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class RecordNotFoundException(BusinessLogicException):
    """Exception raised when a requested record is not found."""

    def __init__(self, resource_type: str, identifier: str) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} not found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class ValidationException(BusinessLogicException):
    """Exception raised when validation fails."""

    def __init__(self, message: str, violations: "list[Violation] | None" = None) -> None:
        self.violations = violations or []
        super().__init__(message, error_code="VALIDATION_FAILED")

    @classmethod
    def from_violations(cls, violations: "list[Violation]") -> "ValidationException":
        """Build a single exception whose message lists every violated rule."""
        return cls("; ".join(v.message for v in violations), violations)


class AuthenticationException(BusinessLogicException):
    """Exception raised when the admin secret is missing or wrong.

    The message never reveals whether a secret is configured.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, error_code="AUTHENTICATION_REQUIRED")


class StorageException(BusinessLogicException):
    """Exception raised when the underlying store fails.

    ``message`` is safe to return to clients; ``cause`` is for operator logs only.
    """

    def __init__(self, message: str, cause: str) -> None:
        self.cause = cause
        super().__init__(message, error_code="STORAGE_ERROR")
