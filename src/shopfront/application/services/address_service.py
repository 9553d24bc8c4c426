"""Address book service.

Keeps the default-address rule: a user with at least one address has
exactly one default. All changes for one call go through the same
repository session and are committed together by the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from shopfront.domain.address import Address, AddressNotFoundError

if TYPE_CHECKING:
    from shopfront.domain.address import AddressRepository

logger = logging.getLogger(__name__)


class AddressService:
    def __init__(self, address_repository: AddressRepository):
        self._address_repo = address_repository

    async def _get_owned(self, user_id: UUID, address_id: UUID) -> Address:
        address = await self._address_repo.find_by_id(address_id)
        # Someone else's address is reported exactly like a missing one
        if address is None or not address.belongs_to(user_id):
            raise AddressNotFoundError(address_id)
        return address

    async def list_addresses(self, user_id: UUID) -> list[Address]:
        return await self._address_repo.find_by_user(user_id)

    async def get_address(self, user_id: UUID, address_id: UUID) -> Address:
        return await self._get_owned(user_id, address_id)

    async def create_address(  # NOQA: PLR0913
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
    ) -> Address:
        is_first = await self._address_repo.count_by_user(user_id) == 0
        make_default = is_default or is_first

        address = Address.create(
            user_id=user_id,
            recipient_name=recipient_name,
            line1=line1,
            line2=line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
            is_default=make_default,
        )

        if make_default and not is_first:
            await self._address_repo.clear_default(user_id)
        await self._address_repo.save(address)

        logger.info("Address %s created for user %s", address.id, user_id)
        return address

    async def update_address(  # NOQA: PLR0913
        self,
        user_id: UUID,
        address_id: UUID,
        recipient_name: str | None = None,
        line1: str | None = None,
        line2: str | None = None,
        city: str | None = None,
        state: str | None = None,
        postal_code: str | None = None,
        country: str | None = None,
        phone: str | None = None,
    ) -> Address:
        address = await self._get_owned(user_id, address_id)
        address.update(
            recipient_name=recipient_name,
            line1=line1,
            line2=line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
        )
        await self._address_repo.save(address)
        return address

    async def set_default(self, user_id: UUID, address_id: UUID) -> Address:
        address = await self._get_owned(user_id, address_id)
        if address.is_default:
            return address

        await self._address_repo.clear_default(user_id)
        address.mark_default()
        await self._address_repo.save(address)

        logger.info("Address %s is now default for user %s", address_id, user_id)
        return address

    async def delete_address(self, user_id: UUID, address_id: UUID) -> None:
        address = await self._get_owned(user_id, address_id)
        if not await self._address_repo.delete(address_id):
            raise AddressNotFoundError(address_id)

        if address.is_default:
            remaining = await self._address_repo.find_by_user(user_id)
            if remaining:
                # Promote the most recently created one
                successor = max(remaining, key=lambda a: a.created_at)
                successor.mark_default()
                await self._address_repo.save(successor)

        logger.info("Address %s deleted for user %s", address_id, user_id)
