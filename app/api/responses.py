"""Helpers building the ``{"status": "success", ...}`` envelope."""

from __future__ import annotations

from typing import Any, Iterable

from fastapi.encoders import jsonable_encoder

from app.db.models.core import User
from app.domain.models import UserModel

PUBLIC_USER_FIELDS = {"id", "name", "email", "role"}


def success(**fields: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "success"}
    payload.update({key: value for key, value in fields.items() if value is not None})
    return jsonable_encoder(payload)


def serialize_user(user: User, include: Iterable[str] | None = None) -> dict[str, Any]:
    model = UserModel.model_validate(user)
    return model.model_dump(mode="json", include=set(include) if include is not None else None)


__all__ = ["PUBLIC_USER_FIELDS", "serialize_user", "success"]
