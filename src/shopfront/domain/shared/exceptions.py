"""Error codes and the exception base classes every domain error extends.

The API layer translates them to HTTP statuses by ``code``.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable ``code`` field of the error envelope.

    Clients branch on these strings; renaming one is a breaking change.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_VERIFICATION_TOKEN = "INVALID_VERIFICATION_TOKEN"

    # Authentication Errors (401)
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    MISSING_AUTH_HEADER = "MISSING_AUTH_HEADER"
    MALFORMED_AUTH_HEADER = "MALFORMED_AUTH_HEADER"
    MISSING_TOKEN = "MISSING_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_TOKEN_TYPE = "INVALID_TOKEN_TYPE"
    AUTH_USER_NOT_FOUND = "AUTH_USER_NOT_FOUND"
    AUTH_USER_INACTIVE = "AUTH_USER_INACTIVE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INCORRECT_CURRENT_PASSWORD = "INCORRECT_CURRENT_PASSWORD"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    REFRESH_TOKEN_EXPIRED = "REFRESH_TOKEN_EXPIRED"
    USER_INACTIVE = "USER_INACTIVE"

    # Permission Errors (403)
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    EMAIL_VERIFICATION_REQUIRED = "EMAIL_VERIFICATION_REQUIRED"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    ADDRESS_NOT_FOUND = "ADDRESS_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    EMAIL_ALREADY_VERIFIED = "EMAIL_ALREADY_VERIFIED"
    DEFAULT_ADDRESS_CONFLICT = "DEFAULT_ADDRESS_CONFLICT"

    # Throttling (429)
    RATE_LIMITED = "RATE_LIMITED"

    # General Errors (500)
    HASHING_FAILED = "HASHING_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Root of the shop's error hierarchy.

    Attributes
    ----------
    message
        Shown to the client verbatim
    code
        One of ErrorCode
    details
        Optional additional context (logged, and only returned to
        clients outside production)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Input was well-formed JSON but semantically invalid."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthenticationError(DomainException):
    """Raised when the caller's identity cannot be established."""

    def __init__(
        self,
        message: str = "Authentication required",
        code: ErrorCode = ErrorCode.AUTHENTICATION_REQUIRED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class PermissionDeniedError(DomainException):
    """Raised when an identified caller may not perform an operation."""

    def __init__(
        self,
        message: str = "Access denied",
        code: ErrorCode = ErrorCode.INSUFFICIENT_ROLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Lookup by id or email came back empty."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """The write would clash with stored data (e.g. a taken email)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RateLimitExceededError(DomainException):
    """Raised when a client exceeds the allowed number of attempts."""

    def __init__(
        self,
        message: str = "Too many authentication attempts",
        code: ErrorCode = ErrorCode.RATE_LIMITED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
