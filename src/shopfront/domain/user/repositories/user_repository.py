"""User repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from shopfront.domain.user.aggregates.user import User
from shopfront.domain.user.value_objects import Email, UserRole


@dataclass(frozen=True)
class UserCredentials:
    """A user together with the stored password hash.

    Only returned by the explicit credential lookups, for password
    verification.
    """

    user: User
    password_hash: str


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups return ``None`` and updates return ``None``/``False`` when the
    user does not exist; callers decide which domain error that means.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_credentials_by_id(self, user_id: UUID) -> Optional[UserCredentials]:
        """Find a user and their password hash by ID."""

    @abstractmethod
    async def find_credentials_by_email(
        self,
        email: Union[str, Email],
    ) -> Optional[UserCredentials]:
        """Find a user and their password hash by email."""

    @abstractmethod
    async def create(self, user: User, password_hash: str) -> None:
        """Persist a new user.

        Raises DuplicateEmailError if the email is already taken.
        """

    @abstractmethod
    async def update(self, user: User) -> Optional[User]:
        """Persist changes to an existing user; None if it no longer exists."""

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash; False if the user is gone."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def count_by_role(self) -> dict[UserRole, int]:
        """Count users grouped by role."""

    @abstractmethod
    async def count_by_active(self) -> dict[bool, int]:
        """Count users grouped by the active flag."""

    @abstractmethod
    async def count_by_verified(self) -> dict[bool, int]:
        """Count users grouped by the email-verified flag."""
