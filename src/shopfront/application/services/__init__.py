"""Application layer services."""

from shopfront.application.services.address_service import AddressService
from shopfront.application.services.auth_gate import AuthGate
from shopfront.application.services.authentication_service import (
    AuthenticationService,
    AuthResult,
    RefreshResult,
    TokenPair,
    UserStats,
)

__all__ = [
    "AddressService",
    "AuthGate",
    "AuthResult",
    "AuthenticationService",
    "RefreshResult",
    "TokenPair",
    "UserStats",
]
