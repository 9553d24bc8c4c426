"""Address book exceptions."""

from shopfront.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class AddressNotFoundError(EntityNotFoundError):
    """Address does not exist or belongs to another user."""

    def __init__(self, address_id: object) -> None:
        self.address_id = address_id
        super().__init__(
            "Address not found",
            ErrorCode.ADDRESS_NOT_FOUND,
            {"address_id": str(address_id)},
        )


class DefaultAddressConflictError(ConflictError):
    """A second default address for the same user reached the database.

    Happens when two requests race to create or promote a default.
    """

    def __init__(self, user_id: object) -> None:
        super().__init__(
            "Another default address was saved at the same time, please retry",
            ErrorCode.DEFAULT_ADDRESS_CONFLICT,
            {"user_id": str(user_id)},
        )


class InvalidAddressError(ValidationError):
    """Raised when an address field fails a domain rule."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message, details={"field": field})
