"""Authentication schemas for request/response models.

Password strength is not checked here: the service reports every
violated rule at once as a WEAK_PASSWORD error.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    model_validator,
)

from shopfront.domain.user import User

NAME_PATTERN = r"^[a-zA-ZÀ-ÿ\s'-]+$"
PHONE_PATTERN = r"^\+?[0-9\s()-]{6,20}$"

# Names and phone numbers are trimmed; passwords are taken byte for byte
PersonName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=2,
        max_length=50,
        pattern=NAME_PATTERN,
    ),
]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password (checked against the policy)")
    first_name: PersonName
    last_name: PersonName
    phone: Optional[PhoneNumber] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "Passw0rd!",
                "first_name": "Alice",
                "last_name": "Lee",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "Passw0rd!",
            },
        },
    )


class RefreshRequest(BaseModel):
    """Request schema for token refresh."""

    refresh_token: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            },
        },
    )


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    first_name: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=50,
        pattern=NAME_PATTERN,
    )
    last_name: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=50,
        pattern=NAME_PATTERN,
    )
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)

    model_config = ConfigDict(str_strip_whitespace=True)


class ChangePasswordRequest(BaseModel):
    """Request schema for changing a user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str
    confirm_password: Optional[str] = Field(
        default=None,
        description="When given, must equal new_password",
    )

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            msg = "Password confirmation does not match"
            raise ValueError(msg)
        return self


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Response schema for user data (never includes the password hash)."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    phone: Optional[str]
    role: str
    is_active: bool
    email_verified: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=user.role.value,
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenResponse(BaseModel):
    """Response schema for an issued token pair."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class AuthResponse(BaseModel):
    """Payload for successful registration or login."""

    user: UserResponse
    tokens: TokenResponse


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int


class AuthStatusResponse(BaseModel):
    authenticated: bool = True
    user_id: UUID
    email: str
    role: str
    email_verified: bool


class VerificationTokenResponse(BaseModel):
    """Issued email verification token.

    Returned directly because mail delivery is not part of this service.
    """

    verification_token: str
    expires_in: int


class UserStatsResponse(BaseModel):
    total: int
    by_role: dict[str, int]
    by_status: dict[str, int]
    by_verification: dict[str, int]
