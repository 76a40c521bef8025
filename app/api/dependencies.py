"""FastAPI dependencies: per-request session, services and access checks."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import AppSettings
from app.db.models.core import User
from app.services.auth import TokenAuthService
from app.services.exceptions import AuthenticationError, PermissionDeniedError
from app.services.feed_client import FeedClient
from app.services.search import FeedSearchService
from app.services.users import SqlUserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield one session per request; commit on success, roll back on error.

    The trailing commit can run after the response is sent. Routes whose
    answer depends on stored rows commit themselves before returning.
    """

    async with request.app.state.database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_feed_search(
    request: Request,
    settings: AppSettings = Depends(get_app_settings),
) -> FeedSearchService:
    client = FeedClient(request.app.state.http_client, settings.feed)
    return FeedSearchService(client, settings.feed)


def get_user_repository(session: AsyncSession = Depends(get_session)) -> SqlUserRepository:
    return SqlUserRepository(session)


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    settings: AppSettings = Depends(get_app_settings),
    users: SqlUserRepository = Depends(get_user_repository),
) -> TokenAuthService:
    return TokenAuthService(session, settings.auth, users=users)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: TokenAuthService = Depends(get_auth_service),
) -> User:
    if credentials is None:
        raise AuthenticationError("Unauthenticated.")
    user = await auth.resolve_token(credentials.credentials)
    if user is None:
        raise AuthenticationError("Unauthenticated.")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError()
    return user


__all__ = [
    "bearer_scheme",
    "get_app_settings",
    "get_auth_service",
    "get_current_user",
    "get_feed_search",
    "get_session",
    "get_user_repository",
    "require_admin",
]
