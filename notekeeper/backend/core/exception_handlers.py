"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions
to standardized API responses. All exceptions are logged and
returned in the standard ErrorResponse format:

    {"success": false, "message": ..., "type": ..., "code": ...,
     ...context, "metadata": {...}}

Usage:
    from notekeeper.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notekeeper.backend.core.exceptions import (
    ApplicationError,
    DatabaseError,
    DuplicateError,
    InvalidReferenceError,
    NotFoundError,
    ParseError,
    PayloadTooLargeError,
    ValidationError,
)
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.schemas.base import ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

# Map exception types to HTTP status codes. Subclasses inherit the
# status of their nearest mapped ancestor.
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    DuplicateError: 400,
    InvalidReferenceError: 400,
    ParseError: 400,
    PayloadTooLargeError: 413,
    DatabaseError: 500,
}


def status_for(exc: ApplicationError) -> int:
    """Resolve the HTTP status for an application exception."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    # Try request state first (set by middleware)
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    # Fall back to header
    return request.headers.get("x-request-id")


def _show_debug_details() -> bool:
    """Stack traces are only exposed outside production with detailed errors on."""
    try:
        from notekeeper.backend.core.config import get_app_config

        app_config = get_app_config()
    except (RuntimeError, FileNotFoundError, ValueError):
        return False
    return (
        app_config.application.environment != "production"
        and app_config.features.api_detailed_errors
    )


def _render(
    request: Request,
    status_code: int,
    message: str,
    error_type: str,
    code: str,
    details: dict[str, Any] | None = None,
    **context: Any,
) -> JSONResponse:
    metadata = ResponseMetadata(request_id=_get_request_id(request))
    response = ErrorResponse(
        message=message,
        type=error_type,
        code=code,
        details=details or None,
        metadata=metadata,
        **context,
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def build_error_response(request: Request, exc: ApplicationError) -> JSONResponse:
    """Render an ApplicationError without logging it."""
    details = exc.details if isinstance(exc, ValidationError) else None
    return _render(
        request,
        status_for(exc),
        exc.message,
        exc.error_type,
        exc.code,
        details=details,
        **exc.context,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Converts application exceptions to standardized JSON responses
    with appropriate HTTP status codes.
    """
    status_code = status_for(exc)
    request_id = _get_request_id(request)

    # Log based on severity
    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    return build_error_response(request, exc)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Malformed JSON bodies become a 400 Parse Error; every other request
    validation failure (bad query types, non-object body) a 400
    Validation Error with per-field details.
    """
    request_id = _get_request_id(request)
    errors = exc.errors()

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    if any(err.get("type") == "json_invalid" for err in errors):
        parse_error = ParseError()
        return _render(
            request, 400, parse_error.message, parse_error.error_type, parse_error.code
        )

    details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in errors
        ]
    }

    return _render(
        request,
        400,
        "Request validation failed",
        ValidationError.error_type,
        "VAL_REQUEST_INVALID",
        details=details,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Handle routing-level HTTP errors.

    Unmatched routes get the "Route not found" body; other HTTP errors
    (for example 405) keep their status and detail.
    """
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _render(
            request,
            404,
            "Route not found",
            "Not Found",
            "RES_ROUTE_NOT_FOUND",
            path=request.url.path,
            suggested="check /docs for available endpoints",
        )

    return _render(
        request,
        exc.status_code,
        str(exc.detail),
        "HTTP Error",
        f"HTTP_{exc.status_code}",
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic error
    response. Outside production the exception type and stack trace are
    included to ease debugging.
    """
    request_id = _get_request_id(request)

    # Always log the full exception for debugging
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    context: dict[str, Any] = {}
    if _show_debug_details():
        context["exception"] = type(exc).__name__
        context["stack"] = "".join(traceback.format_exception(exc))

    return _render(
        request,
        500,
        "An unexpected error occurred",
        ApplicationError.error_type,
        "SYS_INTERNAL_ERROR",
        **context,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Call this function after creating the FastAPI app instance
    to enable standardized error handling.

    Args:
        app: FastAPI application instance
    """
    # Handle all application-specific exceptions
    app.add_exception_handler(ApplicationError, application_error_handler)

    # Handle request validation errors (malformed requests)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Unknown routes and method mismatches
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
