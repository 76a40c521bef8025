"""Pydantic models shared across logic/application layers."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["admin", "user"]

SEARCH_PARAMS = ("nama", "nim", "ymd")


class UserModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role = "user"
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8, max_length=255)
    role: Role = "user"
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str | None = Field(default=None, min_length=8, max_length=255)
    role: Role | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value is not None else None


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class SearchCriteria(BaseModel):
    """Optional filters of the multi-criteria search.

    An empty string counts as "not provided".
    """

    nama: str | None = None
    nim: str | None = None
    ymd: str | None = None

    def provided(self) -> dict[str, str]:
        values = {param: getattr(self, param) for param in SEARCH_PARAMS}
        return {param: value for param, value in values.items() if value}


__all__ = [
    "LoginRequest",
    "Role",
    "SEARCH_PARAMS",
    "SearchCriteria",
    "UserCreate",
    "UserModel",
    "UserUpdate",
]
