"""
Exception handlers.

Every failure is rendered as ``{"status": "failed", "message": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookshare.core.errors import BookshareError
from bookshare.integrations.sentry import capture_exception

logger = logging.getLogger(__name__)


def failed(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "failed", "message": message, **extra},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on the app."""

    @app.exception_handler(BookshareError)
    async def bookshare_error_handler(request: Request, exc: BookshareError):
        if exc.status_code >= 500:
            logger.error("%s %s: %s", request.method, request.url.path, exc.message)
        else:
            logger.info(
                "%s %s -> %d %s",
                request.method, request.url.path, exc.status_code, exc.message,
            )
        return failed(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return failed(422, "Request validation failed", errors=errors)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path,
        )
        capture_exception(exc, path=request.url.path)
        return failed(500, "An internal error occurred")
