"""
Error taxonomy and the single HTTP boundary that renders it.

Services raise these; routers catch nothing. Every failure reaches the client
as `{"success": false, "message": ...}` with a status matching its kind.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownTableError(AppError):
    pass


class StoreError(AppError):
    def __init__(self, message: str, *, store_status: int | None = None) -> None:
        super().__init__(message)
        self.store_status = store_status


# Connection failures, timeouts, 429 and 5xx. Retried by the record client.
class TransientStoreError(StoreError):
    pass


class PermanentStoreError(StoreError):
    pass


class NotFoundError(AppError):
    status_code = 404


class ValidationError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    status_code = 401


class IndexOutOfRangeError(AppError):
    status_code = 400


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def _app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed kind=%s message=%s", type(exc).__name__, exc.message)
    return error_response(exc.status_code, exc.message)


async def _http_error_handler(_: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return error_response(400, "Invalid request.")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg") or "Invalid value")
    return error_response(400, f"{location}: {message}" if location else message)


async def _unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error kind=%s", type(exc).__name__)
    return error_response(500, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
