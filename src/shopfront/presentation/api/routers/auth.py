"""Authentication router for registration, login, profile and token management."""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from shopfront.application.services import AuthResult
from shopfront.domain.shared import DomainException
from shopfront.presentation.api.dependencies import (
    AdminAuth,
    AuthAttempts,
    AuthService,
    CurrentAuth,
    DBSession,
)
from shopfront.presentation.api.schemas import (
    ERROR_RESPONSES,
    AccessTokenResponse,
    ApiResponse,
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
from shopfront_auth import JWTService

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.from_domain(result.user),
        tokens=TokenResponse(
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
            expires_in=result.tokens.expires_in,
        ),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid input or weak password"},
        409: {"description": "Email already registered"},
        429: {"description": "Too many failed attempts"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
    attempts: AuthAttempts,
) -> ApiResponse[AuthResponse]:
    """
    Create a customer account and return an access/refresh token pair.

    The password must satisfy the strength policy; all violated rules are
    reported together.
    """
    attempts.check()
    try:
        result = await auth_service.register(
            email=str(request.email),
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            phone=request.phone,
        )
        await session.commit()
    except DomainException:
        attempts.record_failure()
        raise

    return ApiResponse(
        message="User registered successfully",
        data=_auth_response(result),
    )


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account deactivated"},
        429: {"description": "Too many failed attempts"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
    attempts: AuthAttempts,
) -> ApiResponse[AuthResponse]:
    """
    Authenticate with email and password.

    Unknown emails and wrong passwords produce the same error. A hash made
    with an outdated bcrypt cost is replaced on success.
    """
    attempts.check()
    try:
        result = await auth_service.login(
            email=str(request.email),
            password=request.password,
        )
        await session.commit()
    except DomainException:
        attempts.record_failure()
        raise

    return ApiResponse(message="Login successful", data=_auth_response(result))


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "New access token issued"},
        401: {"description": "Invalid or expired refresh token"},
    },
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService,
) -> ApiResponse[AccessTokenResponse]:
    """
    Exchange a refresh token for a new access token.

    The refresh token itself is not rotated.
    """
    result = await auth_service.refresh_token(request.refresh_token)
    return ApiResponse(
        message="Token refreshed successfully",
        data=AccessTokenResponse(
            access_token=result.access_token,
            expires_in=result.expires_in,
        ),
    )


@router.get(
    "/profile",
    summary="Get current user's profile",
    responses={401: {"description": "Not authenticated"}},
)
async def get_profile(
    auth: CurrentAuth,
    auth_service: AuthService,
) -> ApiResponse[UserResponse]:
    user = await auth_service.get_profile(auth.user_id)
    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserResponse.from_domain(user),
    )


@router.put(
    "/profile",
    summary="Update current user's profile",
    responses={
        400: {"description": "Invalid input"},
        401: {"description": "Not authenticated"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    auth: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    """Update name and/or phone; omitted fields keep their values."""
    user = await auth_service.update_profile(
        auth.user_id,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
    )
    await session.commit()

    return ApiResponse(
        message="Profile updated successfully",
        data=UserResponse.from_domain(user),
    )


@router.put(
    "/change-password",
    summary="Change password",
    responses={
        400: {"description": "New password too weak"},
        401: {"description": "Current password incorrect or not authenticated"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    auth: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[None]:
    """
    Change the current user's password.

    Existing tokens stay valid until they expire.
    """
    await auth_service.change_password(
        user_id=auth.user_id,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    await session.commit()

    return ApiResponse(message="Password changed successfully")


@router.post("/logout", summary="Logout user")
async def logout(auth: CurrentAuth, auth_service: AuthService) -> ApiResponse[None]:
    """Record the logout. The client is expected to discard its tokens."""
    await auth_service.logout(auth.user)
    return ApiResponse(message="Logout successful")


@router.get("/status", summary="Authentication status")
async def auth_status(auth: CurrentAuth) -> ApiResponse[AuthStatusResponse]:
    return ApiResponse(
        message="User is authenticated",
        data=AuthStatusResponse(
            user_id=auth.user_id,
            email=auth.email,
            role=auth.role.value,
            email_verified=auth.user.email_verified,
        ),
    )


@router.post(
    "/verify-email/request",
    summary="Issue an email verification token",
    responses={409: {"description": "Email already verified"}},
)
async def request_email_verification(
    auth: CurrentAuth,
    auth_service: AuthService,
) -> ApiResponse[VerificationTokenResponse]:
    token = await auth_service.request_email_verification(auth.user_id)
    return ApiResponse(
        message="Verification token issued",
        data=VerificationTokenResponse(
            verification_token=token,
            expires_in=JWTService.EMAIL_VERIFICATION_EXPIRE_HOURS * 3600,
        ),
    )


@router.post(
    "/verify-email",
    summary="Verify email address",
    responses={
        400: {"description": "Invalid or expired verification token"},
        409: {"description": "Email already verified"},
    },
)
async def verify_email(
    request: VerifyEmailRequest,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    user = await auth_service.verify_email(request.token)
    await session.commit()

    return ApiResponse(
        message="Email verified successfully",
        data=UserResponse.from_domain(user),
    )


# -----------------------------------------------------------------------------
# Admin
# -----------------------------------------------------------------------------


@router.get(
    "/admin/stats",
    summary="User statistics",
    responses={403: {"description": "Admin role required"}},
)
async def user_stats(
    auth: AdminAuth,
    auth_service: AuthService,
) -> ApiResponse[UserStatsResponse]:
    stats = await auth_service.get_user_stats()
    return ApiResponse(
        message="User statistics retrieved successfully",
        data=UserStatsResponse(
            total=stats.total,
            by_role=stats.by_role,
            by_status=stats.by_status,
            by_verification=stats.by_verification,
        ),
    )


@router.post(
    "/admin/users/{user_id}/deactivate",
    summary="Deactivate a user account",
    responses={
        403: {"description": "Admin role required"},
        404: {"description": "User not found"},
    },
)
async def deactivate_user(
    user_id: UUID,
    auth: AdminAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    user = await auth_service.deactivate_user(user_id)
    await session.commit()

    logger.info("Admin %s deactivated user %s", auth.user_id, user_id)
    return ApiResponse(
        message="User deactivated successfully",
        data=UserResponse.from_domain(user),
    )


@router.post(
    "/admin/users/{user_id}/activate",
    summary="Reactivate a user account",
    responses={
        403: {"description": "Admin role required"},
        404: {"description": "User not found"},
    },
)
async def activate_user(
    user_id: UUID,
    auth: AdminAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    user = await auth_service.reactivate_user(user_id)
    await session.commit()

    logger.info("Admin %s reactivated user %s", auth.user_id, user_id)
    return ApiResponse(
        message="User activated successfully",
        data=UserResponse.from_domain(user),
    )
