"""Shopfront Auth - generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the shop domain. It handles:
- Password hashing (bcrypt)
- Password strength policy
- JWT token creation and verification
- Authorization header parsing

Architecture:
    shopfront_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── policy.py           # Password strength rules
    ├── bearer.py           # "Bearer <token>" parsing
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from shopfront_auth import JWTService, PasswordHashingService, validate_password
"""

from shopfront_auth.bearer import extract_bearer_token
from shopfront_auth.exceptions import (
    AuthError,
    BearerHeaderError,
    EmptyTokenError,
    ExpiredTokenError,
    HashingError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedHeaderError,
    MalformedTokenError,
    MissingHeaderError,
)
from shopfront_auth.policy import PasswordValidationResult, validate_password
from shopfront_auth.schemas import TokenPayload
from shopfront_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    "extract_bearer_token",
    "validate_password",
    # Schemas
    "PasswordValidationResult",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "BearerHeaderError",
    "EmptyTokenError",
    "ExpiredTokenError",
    "HashingError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "MalformedHeaderError",
    "MalformedTokenError",
    "MissingHeaderError",
]
