"""Address repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from shopfront.domain.address.aggregates.address import Address


class AddressRepository(ABC):
    @abstractmethod
    async def find_by_id(self, address_id: UUID) -> Optional[Address]:
        """Find an address by ID regardless of owner."""

    @abstractmethod
    async def find_by_user(self, user_id: UUID) -> list[Address]:
        """List a user's addresses, default first, then newest first."""

    @abstractmethod
    async def count_by_user(self, user_id: UUID) -> int:
        """Count a user's addresses."""

    @abstractmethod
    async def save(self, address: Address) -> None:
        """Insert or update an address."""

    @abstractmethod
    async def delete(self, address_id: UUID) -> bool:
        """Delete an address; False if it did not exist."""

    @abstractmethod
    async def clear_default(self, user_id: UUID) -> None:
        """Unset the default flag on all of a user's addresses."""
