"""Request authentication and authorization checks.

Turns an ``Authorization`` header into an AuthenticatedContext and
enforces role and email-verification requirements. Framework-free: the
FastAPI dependencies in the presentation layer are thin wrappers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from shopfront.application.context import AuthenticatedContext
from shopfront.domain.shared import AuthenticationError, DomainException, ErrorCode
from shopfront.domain.user import (
    EmailVerificationRequiredError,
    InsufficientRoleError,
    UserRole,
)
from shopfront_auth import (
    EmptyTokenError,
    ExpiredTokenError,
    InvalidTokenError,
    JWTService,
    MalformedHeaderError,
    MissingHeaderError,
    extract_bearer_token,
)

if TYPE_CHECKING:
    from shopfront.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthGate:
    def __init__(self, user_repository: UserRepository, jwt_service: JWTService):
        self._user_repo = user_repository
        self._jwt_service = jwt_service

    async def authenticate(self, authorization: str | None) -> AuthenticatedContext:
        """Resolve the caller from an ``Authorization`` header value.

        Raises
        ------
        AuthenticationError
            With a code identifying the failing step: header parsing,
            token verification, user lookup or the active check
        """
        try:
            token = extract_bearer_token(authorization)
        except MissingHeaderError as e:
            raise AuthenticationError(
                "Authorization header required",
                ErrorCode.MISSING_AUTH_HEADER,
            ) from e
        except MalformedHeaderError as e:
            raise AuthenticationError(
                "Invalid authorization format. Use: Bearer <token>",
                ErrorCode.MALFORMED_AUTH_HEADER,
            ) from e
        except EmptyTokenError as e:
            raise AuthenticationError(
                "Access token required",
                ErrorCode.MISSING_TOKEN,
            ) from e

        try:
            payload = self._jwt_service.verify_token(token)
        except ExpiredTokenError as e:
            raise AuthenticationError(
                "Token expired. Please login again",
                ErrorCode.TOKEN_EXPIRED,
            ) from e
        except InvalidTokenError as e:
            logger.warning("Rejected access token: %s", e)
            raise AuthenticationError(
                "Invalid access token",
                ErrorCode.INVALID_TOKEN,
            ) from e

        if not payload.is_access_token():
            raise AuthenticationError("Invalid token type", ErrorCode.INVALID_TOKEN_TYPE)

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            raise AuthenticationError("User not found", ErrorCode.AUTH_USER_NOT_FOUND)
        if not user.is_active:
            raise AuthenticationError(
                "Account is deactivated",
                ErrorCode.AUTH_USER_INACTIVE,
            )

        return AuthenticatedContext(user=user, token=token)

    async def authenticate_optional(
        self,
        authorization: str | None,
    ) -> AuthenticatedContext | None:
        """Like authenticate, but any failure yields ``None``."""
        try:
            return await self.authenticate(authorization)
        except DomainException:
            return None

    @staticmethod
    def require_roles(
        context: AuthenticatedContext | None,
        roles: Iterable[UserRole],
    ) -> AuthenticatedContext:
        if context is None:
            raise AuthenticationError
        allowed = list(roles)
        if context.role not in allowed:
            logger.warning(
                "User %s with role %s denied (requires %s)",
                context.user_id,
                context.role.value,
                ", ".join(r.value for r in allowed),
            )
            raise InsufficientRoleError([r.value for r in allowed])
        return context

    @staticmethod
    def require_verified_email(
        context: AuthenticatedContext | None,
    ) -> AuthenticatedContext:
        if context is None:
            raise AuthenticationError
        if not context.user.email_verified:
            raise EmailVerificationRequiredError
        return context
