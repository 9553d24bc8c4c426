"""Request-scoped authentication context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from shopfront.domain.user import User, UserRole


@dataclass(frozen=True)
class AuthenticatedContext:
    """
    Immutable context for the current authenticated request.

    Created once per request by the AuthGate after the bearer token has
    been verified and the user loaded. Carries the user (never the
    password hash) and the raw token string.
    """

    user: User
    token: str

    @property
    def user_id(self) -> UUID:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def role(self) -> UserRole:
        return self.user.role

    def __str__(self) -> str:
        return f"AuthenticatedContext({self.user.email})"

    def __repr__(self) -> str:
        # token omitted
        return f"AuthenticatedContext(user_id={self.user.id}, email={self.user.email!r})"
