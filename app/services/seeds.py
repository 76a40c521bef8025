"""Startup seed helpers."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.core import User
from app.logging import logger
from app.utils.datetime import utc_now
from app.utils.security import hash_password

DEFAULT_USERS = (
    {
        "name": "Admin",
        "email": "admin@example.com",
        "password": "password",
        "role": "admin",
    },
    {
        "name": "John Doe",
        "email": "john@example.com",
        "password": "password123",
        "role": "user",
    },
    {
        "name": "Turner Mia",
        "email": "turner.mia@example.com",
        "password": "password",
        "role": "user",
    },
)


async def ensure_default_users(session: AsyncSession) -> int:
    """Create the demo accounts that are missing; existing emails stay untouched."""

    created = 0
    for payload in DEFAULT_USERS:
        stmt = select(User).where(User.email == payload["email"])
        result = await session.execute(stmt)
        if result.scalar_one_or_none() is not None:
            continue
        now = utc_now()
        session.add(
            User(
                name=payload["name"],
                email=payload["email"],
                password=hash_password(payload["password"]),
                role=payload["role"],
                is_active=True,
                created_at=now,
                updated_at=now,
            )
        )
        created += 1

    await session.commit()
    if created:
        logger.info("default_users_seeded", created=created)
    return created


__all__ = ["DEFAULT_USERS", "ensure_default_users"]
