"""
Request Context Middleware.

Middleware for request tracking, timing, frontend identification, body
size limits and context propagation.
"""

import uuid
from datetime import datetime, timezone

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from notekeeper.backend.core.exception_handlers import build_error_response
from notekeeper.backend.core.exceptions import PayloadTooLargeError
from notekeeper.backend.core.logging import VALID_SOURCES, get_logger

logger = get_logger(__name__)

KNOWN_FRONTENDS = VALID_SOURCES - {"unknown"}

DEFAULT_MAX_BODY_BYTES = 100 * 1024


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Features:
    - Generates or propagates request ID (X-Request-ID header)
    - Extracts frontend identifier (X-Frontend-ID header)
    - Records request timing (X-Response-Time header)
    - Rejects bodies whose Content-Length exceeds the limit with 413
    - Binds request context to structlog for automatic inclusion in logs
    - Stores context in request.state for access by handlers

    Access in endpoints:
        request.state.request_id
        request.state.frontend
        request.state.start_time
    """

    def __init__(
        self,
        app: ASGIApp,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        log_requests: bool = False,
    ) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes
        self.log_level = "info" if log_requests else "debug"

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        # Default to "unknown" if not provided or not recognized
        frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
        if frontend not in KNOWN_FRONTENDS:
            frontend = "unknown"

        start_time = datetime.now(timezone.utc).replace(tzinfo=None)

        request.state.request_id = request_id
        request.state.frontend = frontend
        request.state.start_time = start_time

        # All logs in this request will include these
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        log = getattr(logger, self.log_level)
        log(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            oversized = self._oversized_body(request)
            if oversized is not None:
                logger.warning(
                    "Request body too large",
                    extra={"content_length": oversized, "limit": self.max_body_bytes},
                )
                response = build_error_response(
                    request,
                    PayloadTooLargeError(limit=self.max_body_bytes, received=oversized),
                )
            else:
                response = await call_next(request)

            duration_ms = self._elapsed_ms(start_time)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            log(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

            return response

        except Exception as exc:
            # Exception handlers produce the response; only record timing here
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": self._elapsed_ms(start_time),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            # Clear context vars to prevent leaking to other requests
            structlog.contextvars.clear_contextvars()

    def _oversized_body(self, request: Request) -> int | None:
        """Return the declared body size if it is over the limit."""
        declared = request.headers.get("content-length")
        if declared is None or not declared.isdigit():
            return None
        size = int(declared)
        return size if size > self.max_body_bytes else None

    @staticmethod
    def _elapsed_ms(start_time: datetime) -> int:
        end_time = datetime.now(timezone.utc).replace(tzinfo=None)
        return int((end_time - start_time).total_seconds() * 1000)
