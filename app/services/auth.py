"""Token-based identity service."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import AuthSettings
from app.db.models.core import PersonalAccessToken, User
from app.logging import logger
from app.services.exceptions import AuthenticationError, InactiveAccountError
from app.services.users import SqlUserRepository, UserRepository
from app.utils.datetime import ensure_utc, utc_now
from app.utils.security import (
    DUMMY_PASSWORD_HASH,
    generate_token,
    hash_token,
    verify_password,
)


class AuthService(Protocol):
    async def authenticate(self, email: str, password: str) -> tuple[str, User]: ...

    async def resolve_token(self, token: str) -> User | None: ...

    async def revoke_tokens(self, user: User) -> int: ...


class TokenAuthService:
    """Issue opaque bearer tokens and resolve them back to users.

    Only the SHA-256 digest of a token is stored; the plain value is handed out
    once by :meth:`authenticate`.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: AuthSettings | None = None,
        users: UserRepository | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or AuthSettings()
        self.users = users or SqlUserRepository(session)

    async def authenticate(self, email: str, password: str) -> tuple[str, User]:
        user = await self.users.get_by_email(email)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("login_failed", reason="unknown_email")
            raise AuthenticationError()
        if not verify_password(password, user.password):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise AuthenticationError()
        if not user.is_active:
            logger.info("login_failed", reason="inactive", user_id=user.id)
            raise InactiveAccountError()

        token = await self.issue_token(user)
        logger.info("login_succeeded", user_id=user.id)
        return token, user

    async def issue_token(self, user: User) -> str:
        plain = generate_token()
        now = utc_now()
        ttl = self.settings.token_ttl_minutes
        self.session.add(
            PersonalAccessToken(
                user_id=user.id,
                name=self.settings.token_name,
                token_hash=hash_token(plain),
                expires_at=now + timedelta(minutes=ttl) if ttl else None,
                created_at=now,
            )
        )
        await self.session.flush()
        return plain

    async def resolve_token(self, token: str) -> User | None:
        if not token:
            return None
        stmt = select(PersonalAccessToken).where(PersonalAccessToken.token_hash == hash_token(token))
        result = await self.session.execute(stmt)
        record = result.scalar_one_or_none()
        if record is None:
            return None

        now = utc_now()
        if record.expires_at is not None and ensure_utc(record.expires_at) <= now:
            logger.info("token_expired", token_id=record.id, user_id=record.user_id)
            return None

        user = await self.session.get(User, record.user_id)
        if user is None or not user.is_active:
            return None
        record.last_used_at = now
        return user

    async def revoke_tokens(self, user: User) -> int:
        result = await self.session.execute(
            delete(PersonalAccessToken).where(PersonalAccessToken.user_id == user.id)
        )
        await self.session.flush()
        logger.info("tokens_revoked", user_id=user.id, count=result.rowcount)
        return result.rowcount


__all__ = ["AuthService", "TokenAuthService"]
