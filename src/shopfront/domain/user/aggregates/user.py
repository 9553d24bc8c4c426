"""User aggregate.

Holds identity and profile data only. The password hash is persisted
alongside the user but never carried by this object; see
UserCredentials for the one place it travels.
"""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from shopfront.domain.shared.time import utc_now
from shopfront.domain.user.value_objects import Email, UserRole


class User:
    """
    User aggregate root.

    New users are customers, active and unverified. Users are never
    deleted; deactivation is a soft state.
    """

    def __init__(
        self,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        phone: str | None = None,
        role: Union[str, UserRole] = UserRole.CUSTOMER,
        is_active: bool = True,
        email_verified: bool = False,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id or uuid4()
        self._first_name = first_name
        self._last_name = last_name
        self._phone = phone
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._is_active = is_active
        self._email_verified = email_verified
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update_profile(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> None:
        """Apply a partial profile update; ``None`` leaves a field untouched."""
        if first_name is not None:
            self._first_name = first_name
        if last_name is not None:
            self._last_name = last_name
        if phone is not None:
            self._phone = phone
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    def reactivate(self) -> None:
        self._is_active = True
        self._touch()

    def mark_email_verified(self) -> None:
        self._email_verified = True
        self._touch()

    def promote_to_admin(self) -> None:
        self._role = UserRole.ADMIN
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        phone: str | None = None,
        role: UserRole = UserRole.CUSTOMER,
    ) -> "User":
        return cls(
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
        )

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        phone: str | None,
        role: Union[str, UserRole],
        is_active: bool,
        email_verified: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
            is_active=is_active,
            email_verified=email_verified,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
