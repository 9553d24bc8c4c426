"""Address domain - the per-user address book."""

from shopfront.domain.address.aggregates import Address
from shopfront.domain.address.exceptions import (
    AddressNotFoundError,
    DefaultAddressConflictError,
    InvalidAddressError,
)
from shopfront.domain.address.repositories import AddressRepository

__all__ = [
    "Address",
    "AddressNotFoundError",
    "AddressRepository",
    "DefaultAddressConflictError",
    "InvalidAddressError",
]
