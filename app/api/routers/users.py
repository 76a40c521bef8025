"""User administration, restricted to admins."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_session, get_user_repository, require_admin
from app.api.responses import PUBLIC_USER_FIELDS, serialize_user, success
from app.db.models.core import User
from app.domain.models import UserCreate, UserUpdate
from app.services.exceptions import PermissionDeniedError
from app.services.users import SqlUserRepository

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])

LISTED_FIELDS = PUBLIC_USER_FIELDS | {"is_active", "created_at", "updated_at"}


@router.get("")
async def list_users(users: SqlUserRepository = Depends(get_user_repository)):
    items = await users.list()
    return success(
        count=len(items),
        data={"users": [serialize_user(user, LISTED_FIELDS) for user in items]},
    )


@router.post("", status_code=201)
async def create_user(
    payload: UserCreate,
    session: AsyncSession = Depends(get_session),
    users: SqlUserRepository = Depends(get_user_repository),
):
    user = await users.create(payload)
    await session.commit()
    return success(
        message="User created successfully",
        data={"user": serialize_user(user, PUBLIC_USER_FIELDS | {"is_active", "created_at"})},
    )


@router.get("/{user_id}")
async def show_user(user_id: int, users: SqlUserRepository = Depends(get_user_repository)):
    user = await users.get(user_id)
    return success(data={"user": serialize_user(user, LISTED_FIELDS)})


@router.put("/{user_id}")
@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    payload: UserUpdate,
    session: AsyncSession = Depends(get_session),
    users: SqlUserRepository = Depends(get_user_repository),
):
    user = await users.get(user_id)
    user = await users.update(user, payload)
    await session.commit()
    return success(
        message="User updated successfully",
        data={"user": serialize_user(user, PUBLIC_USER_FIELDS | {"is_active", "updated_at"})},
    )


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
    users: SqlUserRepository = Depends(get_user_repository),
):
    user = await users.get(user_id)
    if user.id == current_user.id:
        raise PermissionDeniedError("You cannot delete your own account")
    await users.delete(user)
    await session.commit()
    return success(message="User deleted successfully")


__all__ = ["router"]
