from shopfront.domain.address.repositories.address_repository import (
    AddressRepository,
)

__all__ = ["AddressRepository"]
