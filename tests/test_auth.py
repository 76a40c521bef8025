"""Tests for token issuing, resolution and revocation."""

from __future__ import annotations

from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy import select

from app.config import AuthSettings
from app.db.models.core import PersonalAccessToken
from app.domain.models import UserCreate
from app.services.auth import TokenAuthService
from app.services.exceptions import AuthenticationError, InactiveAccountError
from app.services.users import SqlUserRepository
from app.utils.datetime import utc_now
from app.utils.security import hash_token


@pytest_asyncio.fixture
async def member(session):
    users = SqlUserRepository(session)
    return await users.create(
        UserCreate(name="John Doe", email="john@example.com", password="password123")
    )


@pytest.mark.asyncio
async def test_authenticate_issues_hashed_token(session, member):
    auth = TokenAuthService(session)

    token, user = await auth.authenticate("john@example.com", "password123")

    assert user.id == member.id
    result = await session.execute(select(PersonalAccessToken))
    stored = result.scalars().all()
    assert len(stored) == 1
    assert stored[0].name == "auth-token"
    assert stored[0].token_hash == hash_token(token)
    assert stored[0].token_hash != token
    assert stored[0].expires_at is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("email", "password"),
    [("john@example.com", "wrong"), ("nobody@example.com", "password123")],
)
async def test_authenticate_rejects_bad_credentials(session, member, email, password):
    auth = TokenAuthService(session)

    with pytest.raises(AuthenticationError) as excinfo:
        await auth.authenticate(email, password)

    assert excinfo.value.message == "Invalid credentials"
    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_authenticate_rejects_inactive_account(session, member):
    member.is_active = False
    auth = TokenAuthService(session)

    with pytest.raises(InactiveAccountError) as excinfo:
        await auth.authenticate("john@example.com", "password123")

    assert excinfo.value.status_code == 401
    assert "inactive" in excinfo.value.message


@pytest.mark.asyncio
async def test_resolve_token_returns_owner_and_stamps_usage(session, member):
    auth = TokenAuthService(session)
    token, _ = await auth.authenticate("john@example.com", "password123")

    user = await auth.resolve_token(token)

    assert user is not None and user.id == member.id
    result = await session.execute(select(PersonalAccessToken))
    assert result.scalar_one().last_used_at is not None


@pytest.mark.asyncio
async def test_resolve_unknown_token_returns_none(session, member):
    auth = TokenAuthService(session)

    assert await auth.resolve_token("not-a-token") is None
    assert await auth.resolve_token("") is None


@pytest.mark.asyncio
async def test_expired_token_is_rejected(session, member):
    auth = TokenAuthService(session, AuthSettings(token_ttl_minutes=5))
    token, _ = await auth.authenticate("john@example.com", "password123")
    result = await session.execute(select(PersonalAccessToken))
    record = result.scalar_one()
    assert record.expires_at is not None

    record.expires_at = utc_now() - timedelta(minutes=1)
    await session.flush()

    assert await auth.resolve_token(token) is None


@pytest.mark.asyncio
async def test_token_of_deactivated_user_is_rejected(session, member):
    auth = TokenAuthService(session)
    token, _ = await auth.authenticate("john@example.com", "password123")

    member.is_active = False

    assert await auth.resolve_token(token) is None


@pytest.mark.asyncio
async def test_revoke_tokens_removes_every_token(session, member):
    auth = TokenAuthService(session)
    first, _ = await auth.authenticate("john@example.com", "password123")
    second, _ = await auth.authenticate("john@example.com", "password123")

    revoked = await auth.revoke_tokens(member)

    assert revoked == 2
    assert await auth.resolve_token(first) is None
    assert await auth.resolve_token(second) is None
