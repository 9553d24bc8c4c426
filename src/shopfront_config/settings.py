"""Application settings loaded from environment variables.

Lookup order for values:
1. OS environment variables
2. The file named by SHOPFRONT_ENV_FILE, else config/.env.dev, else config/.env
3. Field defaults

pydantic-settings does the type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VAR = "SHOPFRONT_ENV_FILE"
ENV_FILE_CANDIDATES = (".env.dev", ".env")


def _project_root() -> Path:
    """Nearest ancestor holding a ``config/`` dir or a ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / "pyproject.toml").is_file():
            return candidate
    # Installed without a checkout (e.g. in a container image)
    return Path.cwd()


def get_config_dir() -> Path:
    return _project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()
    for name in ENV_FILE_CANDIDATES:
        if (config_dir / name).exists():
            return config_dir / name
    return None


class Settings(BaseSettings):
    """Shopfront configuration.

    Every field maps to the upper-cased environment variable of the same
    name (``jwt_secret_key`` -> ``JWT_SECRET_KEY``).
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required; there is no usable default for the signing key
    jwt_secret_key: SecretStr

    app_name: str = "Shopfront"
    environment: Literal["development", "test", "production"] = "development"

    # DATABASE_URL_OVERRIDE (e.g. sqlite+aiosqlite:///./shop.db) beats the POSTGRES_* parts
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "shopfront"

    api_host: str = "0.0.0.0"  # NOQA: S104
    api_port: int = 8000
    api_debug: bool = False
    # Comma separated; empty disables cross-origin access
    api_cors_origins: str = ""

    jwt_issuer: str = "shopfront-api"
    jwt_access_token_expire_hours: int = 7 * 24

    password_hash_rounds: int = 12

    # Failed register/login attempts allowed per client and window
    rate_limit_enabled: bool = True
    rate_limit_window_minutes: int = 15
    rate_limit_auth_max: int = 5

    log_level: str = "INFO"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_cors_origins(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ",".join(str(origin) for origin in value)
        return str(value) if value else ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL, asyncpg unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        origins = (origin.strip() for origin in self.api_cors_origins.split(","))
        return [origin for origin in origins if origin]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process.

    Raises pydantic's ValidationError when JWT_SECRET_KEY is missing.
    """
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
