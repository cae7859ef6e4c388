"""Standardized error handling for the scheduling service.

This module provides:
1. Exception classes for the voting engine's failure kinds
2. Exception handlers for FastAPI
3. The standard error response model

Usage:
    from scheduler.errors import NotFoundError, UnauthorizedError

    # In the store:
    if event is None:
        raise NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)

    # Register handlers in main.py:
    from scheduler.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    detail: str | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None


class APIError(Exception):
    """Base class for service errors."""

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "An unexpected error occurred"
    default_code: str | None = None

    def __init__(
        self,
        detail: str | None = None,
        error_code: str | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        self.error_code = error_code or self.__class__.default_code
        self.context = context if context else None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.error,
            detail=self.detail,
            error_code=self.error_code,
            context=self.context,
        )


class ValidationError(APIError):
    """Malformed name, dates or availability (400)."""

    status_code = 400
    error = "validation_error"
    detail = "Invalid request"


class InvalidAvailability(ValidationError):
    detail = "Invalid availability"
    default_code = "INVALID_AVAILABILITY"


class InvalidDate(ValidationError):
    detail = "Invalid date"
    default_code = "INVALID_DATE"


class InvalidSlot(ValidationError):
    detail = "Invalid slot"
    default_code = "INVALID_SLOT"


class InvalidValue(ValidationError):
    detail = "Invalid availability value"
    default_code = "INVALID_VALUE"


class ConflictError(APIError):
    """Duplicate (name, creator) pair (409)."""

    status_code = 409
    error = "conflict"
    detail = "Event already exists"
    default_code = "EVENT_EXISTS"


class NotFoundError(APIError):
    """Unknown event or vote (404)."""

    status_code = 404
    error = "not_found"
    detail = "Resource not found"


class UnauthorizedError(APIError):
    """Vote token mismatch without admin override (403)."""

    status_code = 403
    error = "unauthorized"
    detail = "Not authorized"
    default_code = "INVALID_TOKEN"


class ServiceUnavailableError(APIError):
    """Service unavailable error (503)."""

    status_code = 503
    error = "service_unavailable"
    detail = "Service temporarily unavailable"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle service errors."""
    logger.warning(
        "API error: %s (status=%d, path=%s)",
        exc.detail,
        exc.status_code,
        request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in errors
    )
    logger.warning("Request validation failed: %s (path=%s)", detail, request.url.path)
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=_status_to_error_type(400),
            detail=detail or "Invalid request",
        ).model_dump(exclude_none=True),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.exception("Unhandled exception: %s (path=%s)", exc, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_error",
            detail="An unexpected error occurred",
        ).model_dump(exclude_none=True),
    )


def _status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "validation_error",
        403: "unauthorized",
        404: "not_found",
        409: "conflict",
        500: "internal_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)
