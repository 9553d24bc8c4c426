"""API routers."""

from shopfront.presentation.api.routers.addresses import router as addresses_router
from shopfront.presentation.api.routers.auth import router as auth_router

__all__ = ["addresses_router", "auth_router"]
