"""Declarative base and shared column mixins for the ORM models."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shopfront.domain.shared.time import utc_now


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds ``created_at``/``updated_at``, both stamped in UTC."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
