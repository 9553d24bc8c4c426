"""Address aggregate.

A shipping/billing address owned by exactly one user. The "one default
per user" rule spans several addresses, so it is enforced by the
AddressService and the repository, not here.
"""

from datetime import datetime
from uuid import UUID, uuid4

from shopfront.domain.address.exceptions import InvalidAddressError
from shopfront.domain.shared.time import utc_now

COUNTRY_CODE_LENGTH = 2


def _required(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidAddressError(f"{field} is required", field)
    return value


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _country(value: str) -> str:
    code = _required(value, "country").upper()
    if len(code) != COUNTRY_CODE_LENGTH or not code.isalpha():
        raise InvalidAddressError(
            "country must be a two-letter ISO 3166 code",
            "country",
        )
    return code


class Address:
    def __init__(
        self,
        user_id: UUID,
        recipient_name: str,
        line1: str,
        city: str,
        postal_code: str,
        country: str,
        line2: str | None = None,
        state: str | None = None,
        phone: str | None = None,
        is_default: bool = False,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._user_id = user_id
        self._recipient_name = _required(recipient_name, "recipient_name")
        self._line1 = _required(line1, "line1")
        self._line2 = _optional(line2)
        self._city = _required(city, "city")
        self._state = _optional(state)
        self._postal_code = _required(postal_code, "postal_code")
        self._country = _country(country)
        self._phone = _optional(phone)
        self._is_default = is_default
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def recipient_name(self) -> str:
        return self._recipient_name

    @property
    def line1(self) -> str:
        return self._line1

    @property
    def line2(self) -> str | None:
        return self._line2

    @property
    def city(self) -> str:
        return self._city

    @property
    def state(self) -> str | None:
        return self._state

    @property
    def postal_code(self) -> str:
        return self._postal_code

    @property
    def country(self) -> str:
        return self._country

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def is_default(self) -> bool:
        return self._is_default

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def belongs_to(self, user_id: UUID) -> bool:
        return self._user_id == user_id

    def update(
        self,
        recipient_name: str | None = None,
        line1: str | None = None,
        line2: str | None = None,
        city: str | None = None,
        state: str | None = None,
        postal_code: str | None = None,
        country: str | None = None,
        phone: str | None = None,
    ) -> None:
        """Apply a partial update; ``None`` leaves a field untouched."""
        if recipient_name is not None:
            self._recipient_name = _required(recipient_name, "recipient_name")
        if line1 is not None:
            self._line1 = _required(line1, "line1")
        if line2 is not None:
            self._line2 = _optional(line2)
        if city is not None:
            self._city = _required(city, "city")
        if state is not None:
            self._state = _optional(state)
        if postal_code is not None:
            self._postal_code = _required(postal_code, "postal_code")
        if country is not None:
            self._country = _country(country)
        if phone is not None:
            self._phone = _optional(phone)
        self._touch()

    def mark_default(self) -> None:
        self._is_default = True
        self._touch()

    def unmark_default(self) -> None:
        self._is_default = False
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(  # NOQA: PLR0913
        cls,
        user_id: UUID,
        recipient_name: str,
        line1: str,
        city: str,
        postal_code: str,
        country: str,
        line2: str | None = None,
        state: str | None = None,
        phone: str | None = None,
        is_default: bool = False,
    ) -> "Address":
        return cls(
            user_id=user_id,
            recipient_name=recipient_name,
            line1=line1,
            line2=line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
            is_default=is_default,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        user_id: UUID,
        recipient_name: str,
        line1: str,
        line2: str | None,
        city: str,
        state: str | None,
        postal_code: str,
        country: str,
        phone: str | None,
        is_default: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Address":
        return cls(
            id=id,
            user_id=user_id,
            recipient_name=recipient_name,
            line1=line1,
            line2=line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
            is_default=is_default,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Address(id={self._id}, user_id={self._user_id}, "
            f"city={self._city}, default={self._is_default})"
        )
