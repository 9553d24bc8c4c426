"""SQLAlchemy implementation of AddressRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.domain.address import (
    Address,
    AddressRepository,
    DefaultAddressConflictError,
)
from shopfront.domain.shared.time import ensure_tz_aware, utc_now
from shopfront.infrastructure.persistence.sqlalchemy.models import AddressModel

logger = logging.getLogger(__name__)


class AddressRepositorySQLAlchemy(AddressRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, address_id: UUID) -> Optional[Address]:
        model = await self._find_model_by_id(address_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_user(self, user_id: UUID) -> list[Address]:
        stmt = (
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(AddressModel.is_default.desc(), AddressModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def count_by_user(self, user_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(AddressModel)
            .where(AddressModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def save(self, address: Address) -> None:
        existing = await self._find_model_by_id(address.id)
        if existing:
            self._update_model(existing, address)
        else:
            self._session.add(self._map_to_model(address))
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Users are never deleted, so only the one-default index can fail
            await self._session.rollback()
            raise DefaultAddressConflictError(address.user_id) from e

    async def delete(self, address_id: UUID) -> bool:
        stmt = delete(AddressModel).where(AddressModel.id == address_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0

    async def clear_default(self, user_id: UUID) -> None:
        stmt = (
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.is_default.is_(True))
            .values(is_default=False, updated_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    async def _find_model_by_id(self, address_id: UUID) -> Optional[AddressModel]:
        stmt = select(AddressModel).where(AddressModel.id == address_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AddressModel) -> Address:
        return Address.reconstitute(
            id=model.id,
            user_id=model.user_id,
            recipient_name=model.recipient_name,
            line1=model.line1,
            line2=model.line2,
            city=model.city,
            state=model.state,
            postal_code=model.postal_code,
            country=model.country,
            phone=model.phone,
            is_default=model.is_default,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, address: Address) -> AddressModel:
        return AddressModel(
            id=address.id,
            user_id=address.user_id,
            recipient_name=address.recipient_name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
            is_default=address.is_default,
            created_at=address.created_at,
            updated_at=address.updated_at,
        )

    def _update_model(self, model: AddressModel, address: Address) -> None:
        model.recipient_name = address.recipient_name
        model.line1 = address.line1
        model.line2 = address.line2
        model.city = address.city
        model.state = address.state
        model.postal_code = address.postal_code
        model.country = address.country
        model.phone = address.phone
        model.is_default = address.is_default
        model.updated_at = address.updated_at
