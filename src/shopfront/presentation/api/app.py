"""Builds the Shopfront FastAPI app.

Business routes live under /api/v1; /health and / stay unversioned.

Run with:
    uvicorn shopfront.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.presentation.api.exception_handlers import setup_exception_handlers
from shopfront.presentation.api.rate_limit import AuthRateLimiter
from shopfront.presentation.api.routers import addresses_router, auth_router
from shopfront.presentation.api.schemas import HealthResponse
from shopfront_auth import JWTService, PasswordHashingService
from shopfront_config.settings import Settings, get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "uvicorn.access")


@lru_cache(maxsize=None)
def _configure_logging(level_name: str) -> None:
    """Send shopfront logs to stdout at ``level_name``.

    Cached per level so building several apps in one test run does not
    stack handlers.
    """
    log_level = getattr(logging, level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in ("shopfront", "shopfront_auth", "shopfront_config"):
        logging.getLogger(name).setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, login and the token lifecycle.

**Tokens:**
- Access tokens (default 7 days) authorize API calls
- Refresh tokens (30 days) are exchanged at `/auth/refresh`
- Tokens are stateless; logout is client-side

**Security:**
- Passwords are hashed with bcrypt
- Repeated failed register/login attempts are rate limited per client
""",
    },
    {
        "name": "Admin",
        "description": "User statistics and account (de)activation. ADMIN role only.",
    },
    {
        "name": "Addresses",
        "description": """The current user's address book.

Exactly one address is the default once any address exists.
""",
    },
    {
        "name": "Health",
        "description": "Liveness and database reachability.",
    },
    {
        "name": "Info",
        "description": "Name, version and entry points.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables on startup; dispose the engine on shutdown."""
    database: Database = app.state.database

    logger.info("Starting %s API v%s...", app.state.settings.app_name, API_VERSION)
    logger.info("Database: %s", database.display_url)
    try:
        await database.create_tables()
    except (ConnectionRefusedError, OSError):
        logger.critical("Database %s is unreachable", database.display_url)
        raise SystemExit(1) from None

    yield

    logger.info("Shutting down API...")
    await database.dispose()
    logger.info("Engine disposed")


def build_v1_router() -> APIRouter:
    router = APIRouter()
    router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    router.include_router(
        addresses_router,
        prefix="/users/me/addresses",
        tags=["Addresses"],
    )
    return router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory used by uvicorn (``--factory``) and the tests.

    Builds the long-lived collaborators (database handle, token and
    password services, rate limiter) once and stores them on
    ``app.state`` for the request dependencies.

    Parameters
    ----------
    settings
        Explicit settings; ``get_settings()`` when omitted.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="E-commerce backend with **JWT authentication** and user accounts.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
        issuer=settings.jwt_issuer,
    )
    app.state.password_service = PasswordHashingService(
        rounds=settings.password_hash_rounds,
    )
    app.state.rate_limiter = (
        AuthRateLimiter(
            max_attempts=settings.rate_limit_auth_max,
            window_seconds=settings.rate_limit_window_minutes * 60,
        )
        if settings.rate_limit_enabled
        else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
    )

    setup_exception_handlers(app, settings)

    app.include_router(build_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Report ``healthy`` when ``SELECT 1`` succeeds, else ``degraded``."""
        database_status = "ok"
        try:
            async with app.state.database.session() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.exception("Health check: database unavailable")
            database_status = "unavailable"

        return HealthResponse(
            status="healthy" if database_status == "ok" else "degraded",
            version=API_VERSION,
            environment=settings.environment,
            database=database_status,
        )

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "environment": settings.environment,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "addresses": f"{API_V1_PREFIX}/users/me/addresses",
            },
        }

    return app
