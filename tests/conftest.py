"""Shared pytest fixtures for database-backed and HTTP-level tests."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.models import core  # noqa: F401


class _AsyncSessionWrapper:
    def __init__(self, sync_session) -> None:
        self._sync = sync_session

    @property
    def sync_session(self):
        return self._sync

    async def execute(self, *args, **kwargs):
        return self._sync.execute(*args, **kwargs)

    async def get(self, *args, **kwargs):
        return self._sync.get(*args, **kwargs)

    def add(self, obj) -> None:
        self._sync.add(obj)

    def add_all(self, objs) -> None:
        self._sync.add_all(objs)

    async def delete(self, obj) -> None:
        self._sync.delete(obj)

    async def flush(self) -> None:
        self._sync.flush()

    async def commit(self) -> None:
        self._sync.commit()

    async def rollback(self) -> None:
        self._sync.rollback()

    async def refresh(self, obj) -> None:
        self._sync.refresh(obj)

    async def close(self) -> None:
        self._sync.close()


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    sync_session = SessionLocal()
    try:
        yield _AsyncSessionWrapper(sync_session)
    finally:
        sync_session.close()
        engine.dispose()


class FeedStub:
    """Programmable upstream feed served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.calls = 0
        self.status_code = 200
        self.body: Any = {"RC": 200, "RCM": "OK", "DATA": ""}
        self.error: Callable[[httpx.Request], Exception] | None = None

    def serve(self, data: str) -> None:
        self.status_code = 200
        self.body = {"RC": 200, "RCM": "OK", "DATA": data}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.error is not None:
            raise self.error(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=str(self.body))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


SAMPLE_FEED = "\n".join(
    [
        "YMD|NAMA|NIM|ALAMAT",
        "20230405|Turner Mia|9352078461|Jl. Merdeka 1",
        "20230405|Jane Doe|1112223333|Jl. Sudirman 2",
        "20230612|Mia Wallace|9352070000|Jl. Thamrin 3",
        "20230612|turner mia|5550001111|Jl. Gatot 4",
        "",
    ]
)


@pytest.fixture
def feed() -> FeedStub:
    stub = FeedStub()
    stub.serve(SAMPLE_FEED)
    return stub


@pytest.fixture
def sample_feed() -> str:
    return SAMPLE_FEED
