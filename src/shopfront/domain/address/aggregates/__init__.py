from shopfront.domain.address.aggregates.address import Address

__all__ = ["Address"]
