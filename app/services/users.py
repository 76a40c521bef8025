"""User store backed by SQLAlchemy."""

from __future__ import annotations

from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.core import User
from app.domain.models import UserCreate, UserUpdate
from app.logging import logger
from app.services.exceptions import DuplicateEmailError, UserNotFoundError
from app.utils.datetime import utc_now
from app.utils.security import hash_password


class UserRepository(Protocol):
    async def list(self) -> Sequence[User]: ...

    async def get(self, user_id: int) -> User: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(self, data: UserCreate) -> User: ...

    async def update(self, user: User, data: UserUpdate) -> User: ...

    async def delete(self, user: User) -> None: ...


class SqlUserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self) -> Sequence[User]:
        result = await self.session.execute(select(User).order_by(User.id.desc()))
        return result.scalars().all()

    async def get(self, user_id: int) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, data: UserCreate) -> User:
        if await self.get_by_email(data.email) is not None:
            raise DuplicateEmailError()
        now = utc_now()
        user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
            role=data.role,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        await self._flush()
        logger.info("user_created", user_id=user.id, role=user.role)
        return user

    async def update(self, user: User, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        email = changes.get("email")
        if email is not None and email != user.email:
            existing = await self.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise DuplicateEmailError()
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = utc_now()
        await self._flush()
        logger.info("user_updated", user_id=user.id, fields=sorted(changes))
        return user

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()
        logger.info("user_deleted", user_id=user.id)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc


__all__ = ["SqlUserRepository", "UserRepository"]
