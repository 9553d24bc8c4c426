"""SQLAlchemy models for persistence layer."""

from shopfront.infrastructure.persistence.sqlalchemy.models.address_model import (
    AddressModel,
)
from shopfront.infrastructure.persistence.sqlalchemy.models.base import Base
from shopfront.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "AddressModel",
    "Base",
    "UserModel",
]
