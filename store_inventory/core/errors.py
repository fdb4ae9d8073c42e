"""
Domain errors and their translation into HTTP responses.

Services raise ``AppError`` subclasses; database errors bubble up
untouched.  ``register_exception_handlers`` installs one translator per
error family so every failure leaves the API as the same envelope::

    {"status": "fail" | "error", "message": "...", "error": <optional data>}
"""

import logging
import re
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Error with an HTTP status code attached."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.data = data

    @property
    def status(self) -> str:
        return envelope_status(self.status_code)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found", data: Any = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, data)


class InvalidIdError(AppError):
    def __init__(self, message: str = "Invalid ID", data: Any = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, data)


class ConflictError(AppError):
    def __init__(self, message: str = "Resource already exists", data: Any = None):
        super().__init__(message, status.HTTP_409_CONFLICT, data)


def envelope_status(status_code: int) -> str:
    return "error" if status_code >= 500 else "fail"


def error_response(
    message: str,
    status_code: int,
    data: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"status": envelope_status(status_code), "message": message}
    if data:
        body["error"] = jsonable_encoder(data)
    return JSONResponse(body, status_code=status_code, headers=headers)


# Postgres: 'Key (sku)=(TEST-001) already exists.'
_PG_DUPLICATE = re.compile(r"Key \((?P<fields>[^)]*)\)=\((?P<values>.*)\) already exists")
# SQLite: 'UNIQUE constraint failed: product.sku'
_SQLITE_DUPLICATE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)")


def is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate key" in text


def describe_duplicate(exc: IntegrityError) -> str:
    text = str(exc.orig)
    match = _PG_DUPLICATE.search(text)
    if match:
        return f'{match.group("fields")} "{match.group("values")}" already exists'
    match = _SQLITE_DUPLICATE.search(text)
    if match:
        columns = [column.strip().split(".")[-1] for column in match.group("columns").split(",")]
        return f"{', '.join(columns)} already exists"
    return "Duplicate value violates a uniqueness constraint"


def describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{path}: {message}" if path else message)
    return ", ".join(messages) or "Validation failed"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.message, exc.status_code, exc.data)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(describe_validation_error(exc), status.HTTP_400_BAD_REQUEST)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    if is_unique_violation(exc):
        return error_response(describe_duplicate(exc), status.HTTP_409_CONFLICT)
    return error_response(f"Validation failed: {exc.orig}", status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Not found: {request.method} {request.url.path}"
    else:
        message = str(exc.detail)
    return error_response(message, exc.status_code, headers=getattr(exc, "headers", None))


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    response = error_response("Too many requests, please try again later.", status.HTTP_429_TOO_MANY_REQUESTS)
    limiter = request.app.state.limiter
    return limiter._inject_headers(response, request.state.view_rate_limit)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
