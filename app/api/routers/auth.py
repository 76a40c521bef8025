"""Login, logout and current-user endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_auth_service, get_current_user, get_session
from app.api.responses import PUBLIC_USER_FIELDS, serialize_user, success
from app.db.models.core import User
from app.domain.models import LoginRequest
from app.services.auth import TokenAuthService

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_session),
    auth: TokenAuthService = Depends(get_auth_service),
):
    """Exchange email and password for a bearer token.

    The token row is committed before the response leaves, so a token the
    client receives is always usable.
    """

    token, user = await auth.authenticate(payload.email.strip().lower(), payload.password)
    await session.commit()
    return success(
        message="Login successful",
        data={"token": token, "user": serialize_user(user, PUBLIC_USER_FIELDS)},
    )


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    fields = PUBLIC_USER_FIELDS | {"created_at", "updated_at"}
    return success(data={"user": serialize_user(user, fields)})


@router.post("/logout")
async def logout(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    auth: TokenAuthService = Depends(get_auth_service),
):
    """Revoke every token of the current user."""

    await auth.revoke_tokens(user)
    await session.commit()
    return success(message="Logged out successfully")


__all__ = ["router"]
