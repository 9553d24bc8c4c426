"""SQLAlchemy model for the Address aggregate."""

from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from shopfront.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class AddressModel(Base, TimestampMixin):
    """Table: user_addresses"""

    __tablename__ = "user_addresses"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    recipient_name: Mapped[str] = mapped_column(String(100), nullable=False)
    line1: Mapped[str] = mapped_column(String(255), nullable=False)
    line2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_user_addresses_user_id", "user_id"),
        # At most one default per user, whatever the application does
        Index(
            "uq_user_addresses_default",
            "user_id",
            unique=True,
            sqlite_where=text("is_default"),
            postgresql_where=text("is_default"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<AddressModel(id={self.id}, user_id={self.user_id}, "
            f"is_default={self.is_default})>"
        )
