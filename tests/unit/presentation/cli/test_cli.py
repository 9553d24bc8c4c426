"""Tests for the shopfront command-line interface."""

import asyncio

import pytest
from typer.testing import CliRunner

from shopfront.domain.user import User, UserRole
from shopfront.infrastructure.persistence.sqlalchemy import Database
from shopfront.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from shopfront.presentation.cli.app import app

runner = CliRunner()


@pytest.fixture
def database_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL_OVERRIDE", url)
    return url


def _run(coro_factory, url):
    async def _inner():
        database = Database(url)
        try:
            async with database.session() as session:
                result = await coro_factory(UserRepositorySQLAlchemy(session))
                await session.commit()
                return result
        finally:
            await database.dispose()

    return asyncio.run(_inner())


class TestSecretsAndPasswords:
    def test_generate_secrets(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY" in result.output
        assert "POSTGRES_PASSWORD" in result.output

    def test_strong_password(self):
        result = runner.invoke(app, ["password", "check", "Passw0rd!"])

        assert result.exit_code == 0
        assert "meets all requirements" in result.output

    def test_weak_password_lists_violations(self):
        result = runner.invoke(app, ["password", "check", "abc"])

        assert result.exit_code == 1
        assert "at least 8 characters" in result.output


class TestDatabaseCommands:
    def test_init_and_promote(self, database_url):
        assert runner.invoke(app, ["db", "init"]).exit_code == 0

        user = User.create("alice@example.com", "Alice", "Lee")
        _run(lambda repo: repo.create(user, "hash"), database_url)

        result = runner.invoke(app, ["users", "promote", "alice@example.com"])

        assert result.exit_code == 0
        promoted = _run(lambda repo: repo.find_by_id(user.id), database_url)
        assert promoted.role == UserRole.ADMIN

    def test_promote_unknown_user(self, database_url):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["users", "promote", "nobody@example.com"])

        assert result.exit_code == 1
        assert "No user" in result.output
