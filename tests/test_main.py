"""Tests for logging configuration and application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
import structlog
from fastapi.testclient import TestClient

from app import main as main_module
from app.config import AppSettings
from app.logging import configure_logging


def test_configure_logging_outputs_json(capsys):
    configure_logging()
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    assert "unit-test" in out
    assert "foo" in out


def test_configure_logging_accepts_level_names(capsys):
    configure_logging("WARNING", json_logs=False)
    logger = structlog.get_logger()
    logger.info("hidden-event")
    logger.warning("shown-event")
    out = capsys.readouterr().out
    assert "hidden-event" not in out
    assert "shown-event" in out
    configure_logging()


class DummyDatabase:
    def __init__(self) -> None:
        self.schema_created = False
        self.disposed = False
        self.session_calls = 0

    async def create_schema(self) -> None:
        self.schema_created = True

    @asynccontextmanager
    async def session(self):
        self.session_calls += 1
        yield object()

    async def dispose(self) -> None:
        self.disposed = True


def test_lifespan_prepares_database_and_http_client(monkeypatch):
    seeded = []

    async def fake_seed(session):
        seeded.append(session)
        return 0

    monkeypatch.setattr(main_module, "ensure_default_users", fake_seed)
    settings = AppSettings(seed_default_users=True, database={"create_schema": True})
    database = DummyDatabase()
    app = main_module.create_app(settings, database=database)

    with TestClient(app):
        assert app.state.http_client is not None
        assert database.schema_created is True
        assert database.session_calls == 1
        assert len(seeded) == 1

    assert app.state.http_client is None
    assert database.disposed is True


def test_routes_are_mounted_under_prefix():
    app = main_module.create_app(AppSettings(api_prefix="/v1"), database=DummyDatabase())
    paths = {route.path for route in app.routes}

    assert {"/v1/login", "/v1/me", "/v1/logout", "/v1/users", "/v1/search"} <= paths
    assert "/v1/docs" in paths
    assert "/v1/docs/json" in paths


def test_main_runs_uvicorn(monkeypatch):
    calls = {}
    settings = AppSettings(host="127.0.0.1", port=9000)
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda *args, **kwargs: calls.setdefault("logging", args))

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls["kwargs"] = kwargs

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls["logging"] == ("INFO",)
    assert calls["kwargs"]["host"] == "127.0.0.1"
    assert calls["kwargs"]["port"] == 9000
    assert calls["app"].state.settings is settings


@pytest.mark.parametrize(("param", "field"), [("nama", "NAMA"), ("nim", "NIM"), ("ymd", "YMD")])
def test_feed_settings_map_parameters_to_fields(param, field):
    assert AppSettings().feed.field_for(param) == field
