"""
Error responder: every failure reaching the transport layer goes through
``classify`` and answers ``{message, statusCode, errors?}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.logging import error_logger
from shared.utils.exceptions import AppError, ClientError, NotFoundError, classify


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Classify ``exc``, log it, and build the client payload."""
    admin_id = getattr(request.state, "admin_id", None)
    result = classify(exc, admin_id=admin_id)

    error_logger.log(
        result.log_level,
        result.log_message,
        exc_info=exc if result.log_level >= logging.ERROR else None,
        kind=result.kind.value,
        method=request.method,
        path=request.url.path,
        **result.log_extra,
    )
    return JSONResponse(status_code=result.status_code, content=result.to_payload())


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, exc)


async def _handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing failures (unknown path, wrong method) raised by the framework
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(request, NotFoundError())
    return error_response(request, ClientError(str(exc.detail)))


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class in (AppError, RequestValidationError, IntegrityError, RateLimitExceeded, Exception):
        app.add_exception_handler(exc_class, _handle)
    app.add_exception_handler(StarletteHTTPException, _handle_http)
