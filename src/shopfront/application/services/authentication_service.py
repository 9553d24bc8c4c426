"""Authentication service for registration, login and the password lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from shopfront.domain.shared import DomainException, ErrorCode
from shopfront.domain.user import (
    AccountDeactivatedError,
    DuplicateEmailError,
    EmailAlreadyVerifiedError,
    IncorrectCurrentPasswordError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidVerificationTokenError,
    ProfileNotFoundError,
    User,
    UserInactiveError,
    UserNotFoundError,
    UserRole,
    WeakPasswordError,
)
from shopfront_auth import (
    ExpiredTokenError,
    HashingError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    validate_password,
)

if TYPE_CHECKING:
    from shopfront.domain.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True)
class AuthResult:
    """A user together with a freshly issued token pair."""

    user: User
    tokens: TokenPair


@dataclass(frozen=True)
class RefreshResult:
    access_token: str
    expires_in: int


@dataclass(frozen=True)
class UserStats:
    """Aggregate user counts for the admin dashboard."""

    total: int
    by_role: dict[str, int]
    by_status: dict[str, int]
    by_verification: dict[str, int]


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates shopfront_auth infrastructure (password hashing, password
    policy, JWT tokens) with the User domain to provide:
    - Registration and login
    - Profile reads and partial updates
    - Password change
    - Access token refresh
    - Email verification tokens
    - Admin deactivation and user statistics
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        # Verified against when the email is unknown so that login takes
        # the same time whether or not the account exists.
        self._dummy_hash: str | None = None

    @property
    def _expires_in(self) -> int:
        return int(self._jwt_service.access_token_lifetime.total_seconds())

    def _create_token_pair(self, user: User) -> TokenPair:
        access_token = self._jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
        )
        refresh_token = self._jwt_service.create_refresh_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._expires_in,
        )

    def _hash(self, password: str) -> str:
        try:
            return self._password_service.hash(password)
        except HashingError as e:
            raise DomainException(str(e), ErrorCode.HASHING_FAILED) from e

    def _verify_against_dummy(self, password: str) -> None:
        if self._dummy_hash is None:
            self._dummy_hash = self._hash("not-a-real-password")
        self._password_service.verify(password, self._dummy_hash)

    @staticmethod
    def _check_policy(password: str) -> None:
        result = validate_password(password)
        if not result.is_valid:
            raise WeakPasswordError(result.reasons)

    async def _get_user(self, user_id: UUID) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _save(self, user: User) -> User:
        updated = await self._user_repo.update(user)
        if updated is None:
            raise UserNotFoundError(user.id)
        return updated

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str | None = None,
    ) -> AuthResult:
        self._check_policy(password)

        user = User.create(
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
        )

        existing_user = await self._user_repo.find_by_email(user.email)
        if existing_user is not None:
            raise DuplicateEmailError(user.email)

        password_hash = self._hash(password)
        await self._user_repo.create(user, password_hash)

        logger.info("User registered: %s (role: %s)", user.email, user.role.value)
        return AuthResult(user=user, tokens=self._create_token_pair(user))

    async def login(self, email: str, password: str) -> AuthResult:
        credentials = await self._user_repo.find_credentials_by_email(
            email.strip().lower(),
        )
        if credentials is None:
            self._verify_against_dummy(password)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError

        user = credentials.user
        if not self._password_service.verify(password, credentials.password_hash):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError

        if not user.is_active:
            logger.warning("Login refused: user %s is deactivated", user.id)
            raise AccountDeactivatedError

        if self._password_service.needs_rehash(credentials.password_hash):
            await self._user_repo.update_password(user.id, self._hash(password))
            logger.info("Rehashed password for user %s with the current cost", user.id)

        logger.info("User logged in: %s", user.email)
        return AuthResult(user=user, tokens=self._create_token_pair(user))

    async def get_profile(self, user_id: UUID) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise ProfileNotFoundError(user_id)
        return user

    async def update_profile(
        self,
        user_id: UUID,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> User:
        user = await self._get_user(user_id)
        user.update_profile(first_name=first_name, last_name=last_name, phone=phone)
        updated = await self._save(user)

        logger.info("Profile updated for user: %s", user_id)
        return updated

    async def change_password(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        credentials = await self._user_repo.find_credentials_by_id(user_id)
        if credentials is None:
            raise UserNotFoundError(user_id)
        if not credentials.user.is_active:
            raise AccountDeactivatedError
        if not self._password_service.verify(
            current_password,
            credentials.password_hash,
        ):
            logger.warning("Password change rejected for user %s", user_id)
            raise IncorrectCurrentPasswordError

        self._check_policy(new_password)

        new_hash = self._hash(new_password)
        if not await self._user_repo.update_password(user_id, new_hash):
            raise UserNotFoundError(user_id)

        logger.info("Password changed for user: %s", user_id)

    async def refresh_token(self, refresh_token: str) -> RefreshResult:
        try:
            payload = self._jwt_service.verify_token(refresh_token)
        except ExpiredTokenError as e:
            raise InvalidRefreshTokenError(
                "Refresh token expired. Please login again",
                ErrorCode.REFRESH_TOKEN_EXPIRED,
            ) from e
        except InvalidTokenError as e:
            raise InvalidRefreshTokenError from e

        if not payload.is_refresh_token():
            raise InvalidRefreshTokenError

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None or not user.is_active:
            raise UserInactiveError

        access_token = self._jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
        )

        logger.debug("Access token refreshed for user: %s", user.id)
        return RefreshResult(access_token=access_token, expires_in=self._expires_in)

    async def logout(self, user: User) -> None:
        # Tokens are stateless; the client discards them.
        logger.info("User logged out: %s", user.email)

    async def get_user_stats(self) -> UserStats:
        total = await self._user_repo.count()
        by_role = await self._user_repo.count_by_role()
        by_active = await self._user_repo.count_by_active()
        by_verified = await self._user_repo.count_by_verified()

        return UserStats(
            total=total,
            by_role={role.value: by_role.get(role, 0) for role in UserRole},
            by_status={
                "active": by_active.get(True, 0),
                "inactive": by_active.get(False, 0),
            },
            by_verification={
                "verified": by_verified.get(True, 0),
                "unverified": by_verified.get(False, 0),
            },
        )

    async def deactivate_user(self, user_id: UUID) -> User:
        user = await self._get_user(user_id)
        user.deactivate()
        updated = await self._save(user)

        logger.info("User deactivated: %s", user_id)
        return updated

    async def reactivate_user(self, user_id: UUID) -> User:
        user = await self._get_user(user_id)
        user.reactivate()
        updated = await self._save(user)

        logger.info("User reactivated: %s", user_id)
        return updated

    async def request_email_verification(self, user_id: UUID) -> str:
        """Issue an email verification token.

        Delivering the token (by mail or otherwise) is the caller's concern.
        """
        user = await self._get_user(user_id)
        if user.email_verified:
            raise EmailAlreadyVerifiedError

        token = self._jwt_service.create_email_verification_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
        )

        logger.info("Email verification requested for user: %s", user_id)
        return token

    async def verify_email(self, token: str) -> User:
        try:
            payload = self._jwt_service.verify_token(token)
        except InvalidTokenError as e:
            raise InvalidVerificationTokenError from e

        if not payload.is_email_verification_token():
            raise InvalidVerificationTokenError

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None or user.email != payload.email:
            raise InvalidVerificationTokenError
        if user.email_verified:
            raise EmailAlreadyVerifiedError

        user.mark_email_verified()
        updated = await self._save(user)

        logger.info("Email verified for user: %s", user.id)
        return updated
