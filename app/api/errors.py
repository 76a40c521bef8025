"""Render service errors as the API's JSON error envelope."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.logging import logger
from app.services.exceptions import FetchError, ServiceError


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"status": "error", "message": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    extra: dict[str, Any] = {}
    if isinstance(exc, FetchError):
        extra["error"] = exc.detail

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        exception_type=exc.__class__.__name__,
        message=exc.message,
    )
    return error_response(exc.status_code, exc.message, **extra)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return error_response(422, "The given data was invalid.", errors=exc.errors())


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": message},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)


__all__ = ["error_response", "register_exception_handlers"]
