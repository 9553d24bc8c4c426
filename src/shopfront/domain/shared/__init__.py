"""Shared domain building blocks."""

from shopfront.domain.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PermissionDeniedError,
    RateLimitExceededError,
    ValidationError,
)
from shopfront.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "PermissionDeniedError",
    "RateLimitExceededError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
