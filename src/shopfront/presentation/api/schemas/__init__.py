"""Pydantic schemas for API request/response models."""

from shopfront.presentation.api.schemas.addresses import (
    AddressCreateRequest,
    AddressResponse,
    AddressUpdateRequest,
)
from shopfront.presentation.api.schemas.auth import (
    AccessTokenResponse,
    AuthResponse,
    AuthStatusResponse,
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserResponse,
    UserStatsResponse,
    VerificationTokenResponse,
    VerifyEmailRequest,
)
from shopfront.presentation.api.schemas.common import (
    ERROR_RESPONSES,
    ApiResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ERROR_RESPONSES",
    "AccessTokenResponse",
    "AddressCreateRequest",
    "AddressResponse",
    "AddressUpdateRequest",
    "ApiResponse",
    "AuthResponse",
    "AuthStatusResponse",
    "ChangePasswordRequest",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UpdateProfileRequest",
    "UserResponse",
    "UserStatsResponse",
    "VerificationTokenResponse",
    "VerifyEmailRequest",
]
