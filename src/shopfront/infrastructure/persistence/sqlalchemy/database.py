"""Database handle: async engine, session factory and schema management."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Import models to register with Base.metadata
import shopfront.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from shopfront.infrastructure.persistence.sqlalchemy.models.base import Base

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}

    if ":memory:" in url or url.endswith("://"):
        # One shared connection, otherwise every session sees an empty database
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    db_path = url.split("///")[-1]
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return {"connect_args": {"check_same_thread": False}}


class Database:
    """
    Owns the async engine and the session factory.

    One instance is created by the application factory and kept on
    ``app.state``; request dependencies open sessions from it.

    Examples
    --------
    >>> db = Database("sqlite+aiosqlite:///:memory:")
    >>> await db.create_tables()
    >>> async with db.session() as session:
    ...     ...
    >>> await db.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self._url = url
        self._engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            **_engine_kwargs(url),
        )
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def display_url(self) -> str:
        """URL without credentials, safe to log."""
        return self._url.split("@")[-1] if "@" in self._url else self._url

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """
        Create all database tables (idempotent).

        Uses SQLAlchemy's create_all() which only creates missing tables.
        Existing tables and their data are never modified or deleted.
        """
        logger.info("Ensuring all database tables exist...")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema is up to date")

    async def dispose(self) -> None:
        await self._engine.dispose()
