"""UserRepository backed by an SQLAlchemy async session."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from client_register.domain.shared.time import ensure_tz_aware
from client_register.domain.user import (
    Email,
    EmailAlreadyExistsError,
    Phone,
    User,
    UserRepository,
)
from client_register.infrastructure.persistence.sqlalchemy.models import (
    PhoneModel,
    UserModel,
)

logger = logging.getLogger(__name__)


def _normalize(email: Union[str, Email]) -> str:
    return email.value if isinstance(email, Email) else Email(email).value


class UserRepositorySQLAlchemy(UserRepository):
    """Maps User aggregates onto the ``users`` and ``phones`` tables.

    ``save`` only flushes; committing belongs to the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._get_model(user_id)
        return self._to_domain(model) if model is not None else None

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == _normalize(email)),
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        result = await self._session.execute(
            select(UserModel.id).where(UserModel.email == _normalize(email)).limit(1),
        )
        return result.first() is not None

    async def save(self, user: User) -> None:
        model = await self._get_model(user.id)

        if model is None:
            self._session.add(self._to_model(user))
        else:
            self._apply(model, user)

        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            if "unique" in str(e.orig).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

        logger.debug("Saved user %s", user.id)

    async def _get_model(self, user_id: UUID) -> Optional[UserModel]:
        result = await self._session.execute(
            select(UserModel).where(UserModel.id == user_id),
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            token=model.token,
            phones=[
                Phone(p.number, p.city_code, p.country_code) for p in model.phones
            ],
            is_active=model.is_active,
            created_at=ensure_tz_aware(model.created_at),
            modified_at=ensure_tz_aware(model.updated_at),
            last_login_at=ensure_tz_aware(model.last_login_at),
        )

    @staticmethod
    def _to_model(user: User) -> UserModel:
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            token=user.token,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.modified_at,
            last_login_at=user.last_login_at,
            phones=[
                PhoneModel(
                    number=phone.number,
                    city_code=phone.city_code,
                    country_code=phone.country_code,
                )
                for phone in user.phones
            ],
        )

    @staticmethod
    def _apply(model: UserModel, user: User) -> None:
        # id, email and phones never change after registration
        model.name = user.name
        model.password_hash = user.password_hash
        model.token = user.token
        model.is_active = user.is_active
        model.updated_at = user.modified_at
        model.last_login_at = user.last_login_at
