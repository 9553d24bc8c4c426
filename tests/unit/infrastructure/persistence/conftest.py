"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite database with the full schema.
"""

import pytest

from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.infrastructure.persistence.sqlalchemy.repositories import (
    AddressRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)


@pytest.fixture
async def database():
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def user_repo(session):
    return UserRepositorySQLAlchemy(session)


@pytest.fixture
def address_repo(session):
    return AddressRepositorySQLAlchemy(session)
