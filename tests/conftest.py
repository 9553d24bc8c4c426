"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/            # Fast, isolated tests (in-memory SQLite at most)
    │   ├── shopfront_auth/
    │   ├── domain/
    │   ├── application/
    │   ├── infrastructure/
    │   └── presentation/
    └── integration/     # Full HTTP round trips through the FastAPI app

Markers:
    integration    Tests that exercise the whole application stack
    slow           Tests that take more than 1 second
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from shopfront_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

# Tests never need a real secret
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that exercise the full application stack",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Start and finish every test with an empty settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
