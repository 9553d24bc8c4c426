from shopfront.infrastructure.persistence.sqlalchemy.repositories.address.address_repository import (  # NOQA: E501
    AddressRepositorySQLAlchemy,
)

__all__ = ["AddressRepositorySQLAlchemy"]
