"""Unit tests for AddressService."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

import pytest

from shopfront.application.services import AddressService
from shopfront.domain.address import (
    Address,
    AddressNotFoundError,
    AddressRepository,
    InvalidAddressError,
)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class InMemoryAddressRepository(AddressRepository):
    def __init__(self):
        self.addresses: dict[UUID, Address] = {}

    async def find_by_id(self, address_id: UUID) -> Optional[Address]:
        return self.addresses.get(address_id)

    async def find_by_user(self, user_id: UUID) -> list[Address]:
        owned = [a for a in self.addresses.values() if a.belongs_to(user_id)]
        return sorted(owned, key=lambda a: (a.is_default, a.created_at), reverse=True)

    async def count_by_user(self, user_id: UUID) -> int:
        return len(await self.find_by_user(user_id))

    async def save(self, address: Address) -> None:
        self.addresses[address.id] = address

    async def delete(self, address_id: UUID) -> bool:
        return self.addresses.pop(address_id, None) is not None

    async def clear_default(self, user_id: UUID) -> None:
        for address in await self.find_by_user(user_id):
            address.unmark_default()


def _fields(**overrides) -> dict:
    fields = {
        "recipient_name": "Alice Lee",
        "line1": "1 Main St",
        "city": "Springfield",
        "postal_code": "12345",
        "country": "us",
    }
    fields.update(overrides)
    return fields


class TestAddressService:
    def setup_method(self):
        self.repo = InMemoryAddressRepository()
        self.service = AddressService(self.repo)
        self.user_id = uuid4()
        self.other_user_id = uuid4()

    def _defaults(self) -> list[Address]:
        return [
            a
            for a in self.repo.addresses.values()
            if a.belongs_to(self.user_id) and a.is_default
        ]

    async def _seed(self, count: int) -> list[Address]:
        """Store ``count`` addresses, oldest first; the first is the default."""
        seeded = []
        for i in range(count):
            address = Address(
                user_id=self.user_id,
                is_default=i == 0,
                created_at=BASE_TIME + timedelta(minutes=i),
                **_fields(line1=f"{i} Main St"),
            )
            await self.repo.save(address)
            seeded.append(address)
        return seeded

    async def test_first_address_becomes_default(self):
        address = await self.service.create_address(self.user_id, **_fields())

        assert address.is_default
        assert address.country == "US"
        assert self._defaults() == [address]

    async def test_second_address_is_not_default(self):
        first = await self.service.create_address(self.user_id, **_fields())
        second = await self.service.create_address(self.user_id, **_fields(line1="2 Elm St"))

        assert first.is_default
        assert not second.is_default

    async def test_new_default_replaces_old_default(self):
        first = await self.service.create_address(self.user_id, **_fields())
        second = await self.service.create_address(
            self.user_id,
            is_default=True,
            **_fields(line1="2 Elm St"),
        )

        assert second.is_default
        assert not first.is_default
        assert self._defaults() == [second]

    async def test_invalid_address_is_not_stored(self):
        with pytest.raises(InvalidAddressError):
            await self.service.create_address(self.user_id, **_fields(country="USA"))

        assert self.repo.addresses == {}

    async def test_list_only_returns_own_addresses_default_first(self):
        seeded = await self._seed(3)
        await self.repo.save(Address(user_id=self.other_user_id, **_fields()))

        listed = await self.service.list_addresses(self.user_id)

        assert listed[0] is seeded[0]
        assert set(listed) == set(seeded)

    async def test_other_users_address_looks_missing(self):
        foreign = Address(user_id=self.other_user_id, **_fields())
        await self.repo.save(foreign)

        with pytest.raises(AddressNotFoundError):
            await self.service.get_address(self.user_id, foreign.id)
        with pytest.raises(AddressNotFoundError):
            await self.service.delete_address(self.user_id, foreign.id)

        assert foreign.id in self.repo.addresses

    async def test_update_is_partial(self):
        (address,) = await self._seed(1)

        updated = await self.service.update_address(
            self.user_id,
            address.id,
            city="Shelbyville",
        )

        assert updated.city == "Shelbyville"
        assert updated.line1 == "0 Main St"
        assert updated.is_default

    async def test_update_unknown_address(self):
        with pytest.raises(AddressNotFoundError):
            await self.service.update_address(self.user_id, uuid4(), city="X")

    async def test_set_default_moves_the_flag(self):
        first, second = await self._seed(2)

        result = await self.service.set_default(self.user_id, second.id)

        assert result.is_default
        assert not first.is_default
        assert self._defaults() == [second]

    async def test_set_default_on_current_default_is_noop(self):
        (first,) = await self._seed(1)

        result = await self.service.set_default(self.user_id, first.id)

        assert result is first
        assert self._defaults() == [first]

    async def test_deleting_default_promotes_newest_remaining(self):
        first, second, third = await self._seed(3)

        await self.service.delete_address(self.user_id, first.id)

        assert first.id not in self.repo.addresses
        assert third.is_default
        assert not second.is_default

    async def test_deleting_non_default_keeps_default(self):
        first, second = await self._seed(2)

        await self.service.delete_address(self.user_id, second.id)

        assert self._defaults() == [first]

    async def test_deleting_last_address(self):
        (only,) = await self._seed(1)

        await self.service.delete_address(self.user_id, only.id)

        assert await self.service.list_addresses(self.user_id) == []
