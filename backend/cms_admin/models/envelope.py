"""Uniform JSON response envelope.

Every admin response has the shape ``{"status", "message", "data"}`` on
success or ``{"status", "message", "errors"}`` on failure. ``failure`` is
the only place where an error kind is mapped to an HTTP status.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from cms_admin.config import settings
from cms_admin.core.resource import validation_messages
from cms_admin.db.exceptions import DatabaseError, RecordNotFoundError, RecordValidationError

logger = logging.getLogger(__name__)

MSG_BAD_REQUEST = "Invalid request parameters."
MSG_NOT_FOUND = "Resource not found."
MSG_SERVER_ERROR = "Internal server error."
MSG_RATE_LIMITED = "Too many requests."


def success(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    """Build a success envelope. ``data`` defaults to an empty object."""
    return JSONResponse(
        status_code=status_code,
        content={
            "status": True,
            "message": message,
            "data": {} if data is None else data,
        },
    )


def _error_body(message: str, errors: list[str]) -> dict[str, Any]:
    return {"status": False, "message": message, "errors": errors}


def failure(error: Exception) -> JSONResponse:
    """Classify ``error`` and build the matching failure envelope.

    Validation errors map to 400 with one message per field, not-found
    errors to 404 and anything else to 500.
    """
    if isinstance(error, RecordValidationError):
        return JSONResponse(status_code=400, content=_error_body(MSG_BAD_REQUEST, error.errors))

    if isinstance(error, RequestValidationError):
        return JSONResponse(status_code=400, content=_error_body(MSG_BAD_REQUEST, validation_messages(error)))

    if isinstance(error, RecordNotFoundError):
        return JSONResponse(status_code=404, content=_error_body(MSG_NOT_FOUND, [str(error)]))

    detail = str(error) if settings.dev_mode else MSG_SERVER_ERROR
    return JSONResponse(status_code=500, content=_error_body(MSG_SERVER_ERROR, [detail]))


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def _failure_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, (RecordValidationError, RequestValidationError, RecordNotFoundError)):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    else:
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return failure(exc)


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(detail, [detail]),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    response = JSONResponse(status_code=429, content=_error_body(MSG_RATE_LIMITED, [str(exc.detail)]))
    # Retry-After and X-RateLimit-* headers
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every handler error through ``failure``."""
    app.add_exception_handler(RecordValidationError, _failure_handler)
    app.add_exception_handler(RecordNotFoundError, _failure_handler)
    app.add_exception_handler(RequestValidationError, _failure_handler)
    app.add_exception_handler(DatabaseError, _failure_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _failure_handler)
