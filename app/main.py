"""Application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.routers import setup_routers
from app.config import AppSettings, get_settings
from app.db.session import Database
from app.logging import configure_logging, logger
from app.services.seeds import ensure_default_users


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: AppSettings = app.state.settings
    database: Database = app.state.database

    owns_client = app.state.http_client is None
    if owns_client:
        app.state.http_client = httpx.AsyncClient(timeout=settings.feed.timeout_seconds)

    if settings.database.create_schema:
        await database.create_schema()
    if settings.seed_default_users:
        async with database.session() as session:
            await ensure_default_users(session)

    logger.info("api_starting", environment=settings.environment, feed_url=str(settings.feed.url))
    try:
        yield
    finally:
        if owns_client:
            await app.state.http_client.aclose()
            app.state.http_client = None
        await database.dispose()
        logger.info("api_stopped")


def create_app(
    settings: AppSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    database: Database | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    prefix = settings.api_prefix.rstrip("/")

    app = FastAPI(
        title="Feed Search API",
        description="Token-authenticated search over the upstream student feed.",
        lifespan=lifespan,
        docs_url=f"{prefix}/docs",
        openapi_url=f"{prefix}/docs/json",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.http_client = http_client
    app.state.database = database or Database(settings=settings)

    register_exception_handlers(app)
    app.include_router(setup_routers(), prefix=prefix)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.json_logs)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
