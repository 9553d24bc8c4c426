"""SQLAlchemy repository implementations organized by bounded context."""

from shopfront.infrastructure.persistence.sqlalchemy.repositories.address import (
    AddressRepositorySQLAlchemy,
)
from shopfront.infrastructure.persistence.sqlalchemy.repositories.user import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AddressRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
