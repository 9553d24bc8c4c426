"""FastAPI dependency injection for the Shopfront API.

Provides dependencies for:
- Database sessions (from the Database handle on app.state)
- Service instances
- Authentication (AuthenticatedContext from the bearer token)
- Role and email-verification gates
- Per-client rate limiting of auth attempts

Long-lived objects (Database, JWTService, PasswordHashingService,
AuthRateLimiter) are created once in create_app() and read from
``request.app.state`` here.
"""

import logging
from collections.abc import AsyncGenerator, Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.application.context import AuthenticatedContext
from shopfront.application.services import (
    AddressService,
    AuthenticationService,
    AuthGate,
)
from shopfront.domain.user import UserRole
from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.infrastructure.persistence.sqlalchemy.repositories import (
    AddressRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from shopfront.presentation.api.rate_limit import ClientAttempts
from shopfront_auth import JWTService, PasswordHashingService
from shopfront_config.settings import Settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Application state
# -----------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    return request.app.state.password_service


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session per request. Endpoints commit explicitly; anything not
    committed is rolled back when the session closes.
    """
    async with database.session() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


async def get_authentication_service(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


async def get_address_service(session: DBSession) -> AddressService:
    return AddressService(address_repository=AddressRepositorySQLAlchemy(session))


async def get_auth_gate(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthGate:
    return AuthGate(
        user_repository=UserRepositorySQLAlchemy(session),
        jwt_service=jwt_service,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
AddressServiceDep = Annotated[AddressService, Depends(get_address_service)]
AuthGateDep = Annotated[AuthGate, Depends(get_auth_gate)]


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


async def get_current_auth(
    gate: AuthGateDep,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedContext:
    """
    Resolve the caller from the ``Authorization`` header.

    Raises
    ------
    AuthenticationError
        Mapped to 401 by the exception handlers
    """
    return await gate.authenticate(authorization)


# Type alias for the authenticated request context
CurrentAuth = Annotated[AuthenticatedContext, Depends(get_current_auth)]


async def get_optional_auth(
    gate: AuthGateDep,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedContext | None:
    """
    Optional authentication dependency.

    Returns the context if a valid token is provided, None otherwise.
    """
    return await gate.authenticate_optional(authorization)


OptionalAuth = Annotated[AuthenticatedContext | None, Depends(get_optional_auth)]


def require_roles(
    *roles: UserRole,
) -> Callable[..., Coroutine[Any, Any, AuthenticatedContext]]:
    """Build a dependency that admits only the given roles.

    Examples
    --------
    >>> @router.get("/admin/stats")
    ... async def stats(auth: Annotated[AuthenticatedContext,
    ...                                 Depends(require_roles(UserRole.ADMIN))]):
    ...     ...
    """

    async def dependency(auth: CurrentAuth) -> AuthenticatedContext:
        return AuthGate.require_roles(auth, roles)

    return dependency


async def require_verified_email(auth: CurrentAuth) -> AuthenticatedContext:
    return AuthGate.require_verified_email(auth)


AdminAuth = Annotated[AuthenticatedContext, Depends(require_roles(UserRole.ADMIN))]
VerifiedAuth = Annotated[AuthenticatedContext, Depends(require_verified_email)]


# -----------------------------------------------------------------------------
# Rate limiting
# -----------------------------------------------------------------------------


def get_client_attempts(request: Request) -> ClientAttempts:
    key = request.client.host if request.client else "unknown"
    return ClientAttempts(request.app.state.rate_limiter, key)


AuthAttempts = Annotated[ClientAttempts, Depends(get_client_attempts)]
