"""FastAPI presentation layer."""

from shopfront.presentation.api.app import create_app

__all__ = ["create_app"]
