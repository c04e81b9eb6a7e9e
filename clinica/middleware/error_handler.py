"""Exception handlers mapping failures to ``{error, message, path}`` bodies."""

from typing import Any

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from clinica.core.exceptions import AppException

logger = structlog.get_logger(__name__)


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: Any,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    """JSON error body shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, **extra, "path": str(request.url)},
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors carry their own status code and user-facing message."""
    return error_response(request, exc.status_code, exc.__class__.__name__, exc.message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Framework errors: 401/403 from dependencies, 404 for unknown routes."""
    return error_response(
        request,
        exc.status_code,
        "HTTPException",
        exc.detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Request body or query validation failures, with per-field details."""
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "ValidationError",
        "Request validation failed",
        details=jsonable_encoder(exc.errors()),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Database errors answer 500 with the driver's message.

    No retry is attempted; the client decides whether to resubmit.
    """
    message = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
    logger.error("database_error", path=request.url.path, error=message)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "DatabaseError", message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is logged and hidden behind a generic message."""
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred",
    )
