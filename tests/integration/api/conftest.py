"""Pytest fixtures for API integration tests.

Every test gets its own SQLite database file and a fresh application, so
rate limiter state and data never leak between tests.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from shopfront.presentation.api.app import API_V1_PREFIX, create_app
from shopfront_config.settings import Settings

TEST_PASSWORD = "Passw0rd!"


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'shopfront-test.db'}"


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings with debug enabled and cheap password hashing."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        environment="test",
        database_url_override=database_url,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        password_hash_rounds=4,
        rate_limit_enabled=True,
        rate_limit_auth_max=5,
        log_level="WARNING",
    )


@pytest.fixture
def app(api_settings):
    return create_app(api_settings)


@pytest.fixture
def client(app):
    """Test client; entering it runs the lifespan, which creates tables."""
    with TestClient(app) as test_client:
        yield test_client


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """POST /auth/register with sensible defaults; returns the response."""

    def _register(email="alice@example.com", password=TEST_PASSWORD, **extra):
        payload = {
            "email": email,
            "password": password,
            "first_name": "Alice",
            "last_name": "Lee",
            **extra,
        }
        return client.post(f"{API_V1_PREFIX}/auth/register", json=payload)

    return _register


@pytest.fixture
def registered(register_user) -> dict:
    """A registered customer: ``{"user": ..., "tokens": ...}``."""
    response = register_user()
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def auth_headers(registered) -> dict[str, str]:
    return _bearer(registered["tokens"]["access_token"])


@pytest.fixture
def promote_to_admin(database_url):
    """Grant the ADMIN role directly in the database.

    Runs on its own event loop and engine; the app keeps its own.
    """

    def _promote(email: str) -> None:
        async def _run():
            database = Database(database_url)
            try:
                async with database.session() as session:
                    repo = UserRepositorySQLAlchemy(session)
                    user = await repo.find_by_email(email)
                    user.promote_to_admin()
                    await repo.update(user)
                    await session.commit()
            finally:
                await database.dispose()

        asyncio.run(_run())

    return _promote


@pytest.fixture
def admin_headers(register_user, promote_to_admin) -> dict[str, str]:
    response = register_user(email="admin@example.com")
    assert response.status_code == 201
    promote_to_admin("admin@example.com")
    return _bearer(response.json()["data"]["tokens"]["access_token"])

