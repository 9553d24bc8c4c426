"""User persistence on top of an AsyncSession."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.domain.shared.time import ensure_tz_aware
from shopfront.domain.user import (
    DuplicateEmailError,
    Email,
    InvalidEmailError,
    User,
    UserCredentials,
    UserRepository,
    UserRole,
)
from shopfront.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


def _normalize(email: Union[str, Email]) -> Optional[str]:
    if isinstance(email, Email):
        return email.value
    try:
        return Email(email).value
    except InvalidEmailError:
        return None


class UserRepositorySQLAlchemy(UserRepository):
    """Maps ``users`` rows to User aggregates.

    Never commits; the caller's unit of work owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        model = await self._find_model_by_email(email)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_credentials_by_id(self, user_id: UUID) -> Optional[UserCredentials]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return UserCredentials(
            user=self._map_to_domain(model),
            password_hash=model.password_hash,
        )

    async def find_credentials_by_email(
        self,
        email: Union[str, Email],
    ) -> Optional[UserCredentials]:
        model = await self._find_model_by_email(email)
        if model is None:
            return None
        return UserCredentials(
            user=self._map_to_domain(model),
            password_hash=model.password_hash,
        )

    async def create(self, user: User, password_hash: str) -> None:
        model = self._map_to_model(user, password_hash)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # The only unique column besides the primary key
            await self._session.rollback()
            raise DuplicateEmailError(user.email) from e

        logger.debug("Created user: %s", user.id)

    async def update(self, user: User) -> Optional[User]:
        model = await self._find_model_by_id(user.id)
        if model is None:
            return None

        self._update_model(model, user)
        await self._session.flush()
        return self._map_to_domain(model)

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return False

        model.password_hash = password_hash
        await self._session.flush()
        return True

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_by_role(self) -> dict[UserRole, int]:
        stmt = select(UserModel.role, func.count()).group_by(UserModel.role)
        result = await self._session.execute(stmt)
        return {UserRole(role): count for role, count in result.all()}

    async def count_by_active(self) -> dict[bool, int]:
        stmt = select(UserModel.is_active, func.count()).group_by(UserModel.is_active)
        result = await self._session.execute(stmt)
        return {bool(flag): count for flag, count in result.all()}

    async def count_by_verified(self) -> dict[bool, int]:
        stmt = select(UserModel.email_verified, func.count()).group_by(
            UserModel.email_verified,
        )
        result = await self._session.execute(stmt)
        return {bool(flag): count for flag, count in result.all()}

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_model_by_email(
        self,
        email: Union[str, Email],
    ) -> Optional[UserModel]:
        email_value = _normalize(email)
        if email_value is None:
            return None
        stmt = select(UserModel).where(UserModel.email == email_value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            role=model.role,
            is_active=model.is_active,
            email_verified=model.email_verified,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User, password_hash: str) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=user.role.value,
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        # id, email and password_hash are not changed here
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.phone = user.phone
        model.role = user.role.value
        model.is_active = user.is_active
        model.email_verified = user.email_verified
        model.updated_at = user.updated_at
