"""User domain exceptions.

Account lifecycle, credential and access errors. Each carries a stable
ErrorCode; the API layer derives the HTTP status from that code.
"""

from shopfront.domain.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    PermissionDeniedError,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when an email address does not have a valid format."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class WeakPasswordError(ValidationError):
    """Password rejected by the strength policy.

    Attributes
    ----------
    reasons
        Every rule the password violated
    """

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__(
            "; ".join(self.reasons) or "Password does not meet requirements",
            ErrorCode.WEAK_PASSWORD,
            {"reasons": self.reasons},
        )


class DuplicateEmailError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "User with this email already exists",
            ErrorCode.DUPLICATE_EMAIL,
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(
        self,
        user_id: object,
        code: ErrorCode = ErrorCode.USER_NOT_FOUND,
    ) -> None:
        self.user_id = user_id
        super().__init__("User not found", code, {"user_id": str(user_id)})


class ProfileNotFoundError(UserNotFoundError):
    def __init__(self, user_id: object) -> None:
        super().__init__(user_id, ErrorCode.PROFILE_NOT_FOUND)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email or password is incorrect during login.

    The same message is used for unknown emails and wrong passwords.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password", ErrorCode.INVALID_CREDENTIALS)


class IncorrectCurrentPasswordError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(
            "Current password is incorrect",
            ErrorCode.INCORRECT_CURRENT_PASSWORD,
        )


class InvalidRefreshTokenError(AuthenticationError):
    def __init__(
        self,
        message: str = "Invalid refresh token",
        code: ErrorCode = ErrorCode.INVALID_REFRESH_TOKEN,
    ) -> None:
        super().__init__(message, code)


class UserInactiveError(AuthenticationError):
    """Refresh attempted for a user that no longer exists or is inactive."""

    def __init__(self) -> None:
        super().__init__("User not found or inactive", ErrorCode.USER_INACTIVE)


class AccountDeactivatedError(PermissionDeniedError):
    def __init__(
        self,
        message: str = "Account is deactivated. Please contact support",
    ) -> None:
        super().__init__(message, ErrorCode.ACCOUNT_DEACTIVATED)


class EmailVerificationRequiredError(PermissionDeniedError):
    def __init__(self) -> None:
        super().__init__(
            "Please verify your email address to access this resource",
            ErrorCode.EMAIL_VERIFICATION_REQUIRED,
        )


class InsufficientRoleError(PermissionDeniedError):
    def __init__(self, allowed_roles: list[str]) -> None:
        self.allowed_roles = allowed_roles
        super().__init__(
            f"Access denied. Required role: {' or '.join(allowed_roles)}",
            ErrorCode.INSUFFICIENT_ROLE,
            {"allowed_roles": allowed_roles},
        )


class EmailAlreadyVerifiedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            "Email address is already verified",
            ErrorCode.EMAIL_ALREADY_VERIFIED,
        )


class InvalidVerificationTokenError(ValidationError):
    def __init__(
        self,
        message: str = "Invalid or expired email verification token",
    ) -> None:
        super().__init__(message, ErrorCode.INVALID_VERIFICATION_TOKEN)
