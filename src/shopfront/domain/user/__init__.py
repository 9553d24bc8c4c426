"""User domain - manages customer and admin identities.

This domain handles:
- User aggregate (identity, profile, role, active/verified flags)
- Email value object (validated, lower-cased)
- Repository interface (implementation in infrastructure)

Design notes:
- User ID is a random UUID4 generated at creation
- The password hash is never part of the aggregate
- Users are deactivated, never deleted
"""

from shopfront.domain.user.aggregates import User
from shopfront.domain.user.exceptions import (
    AccountDeactivatedError,
    DuplicateEmailError,
    EmailAlreadyVerifiedError,
    EmailVerificationRequiredError,
    IncorrectCurrentPasswordError,
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidRefreshTokenError,
    InvalidVerificationTokenError,
    ProfileNotFoundError,
    UserInactiveError,
    UserNotFoundError,
    WeakPasswordError,
)
from shopfront.domain.user.repositories import UserCredentials, UserRepository
from shopfront.domain.user.value_objects import Email, UserRole

__all__ = [
    "AccountDeactivatedError",
    "DuplicateEmailError",
    "Email",
    "EmailAlreadyVerifiedError",
    "EmailVerificationRequiredError",
    "IncorrectCurrentPasswordError",
    "InsufficientRoleError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidRefreshTokenError",
    "InvalidVerificationTokenError",
    "ProfileNotFoundError",
    "User",
    "UserCredentials",
    "UserInactiveError",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "WeakPasswordError",
]
