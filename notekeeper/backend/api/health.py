"""
Health Check Endpoints.

Provides the service banner plus liveness and readiness checks.

Endpoints:
- /: Service information and endpoint map
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.database import get_database
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

_started_at = utc_now()

FEATURES = [
    "Create, read, update, delete notes",
    "Search notes by title and content",
    "Filter by category, priority, pinned and archived status",
    "Pin and archive notes",
    "Sort by title, dates, category or priority",
    "Page-based pagination",
]


async def check_database(request: Request) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_initialized:
        return {"status": "not_configured"}

    start = utc_now()
    try:
        await get_database(request).ping()
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }

    latency_ms = int((utc_now() - start).total_seconds() * 1000)
    return {
        "status": "healthy",
        "latency_ms": latency_ms,
    }


@router.get("/")
async def service_info() -> dict[str, Any]:
    """Describe the service and list its endpoints."""
    app_settings = get_app_config().application
    prefix = f"{app_settings.api_prefix}/notes"

    return {
        "message": f"Welcome to {app_settings.name}",
        "version": app_settings.version,
        "status": "running",
        "endpoints": {
            "health": "GET /health",
            "notes": {
                "list": f"GET {prefix}",
                "get": f"GET {prefix}/:id",
                "create": f"POST {prefix}",
                "update": f"PUT {prefix}/:id",
                "delete": f"DELETE {prefix}/:id",
                "togglePin": f"PATCH {prefix}/:id/pin",
                "toggleArchive": f"PATCH {prefix}/:id/archive",
                "search": f"GET {prefix}/search?q=query",
                "categories": f"GET {prefix}/categories",
                "byCategory": f"GET {prefix}/category/:category",
            },
        },
        "features": FEATURES,
    }


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks; this endpoint should always respond quickly.
    """
    now = utc_now()
    return {
        "status": "healthy",
        "timestamp": now.isoformat(),
        "uptime_seconds": int((now - _started_at).total_seconds()),
    }


@router.get("/health/ready", response_model=None)
async def readiness_check(request: Request) -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 200 if ready to serve traffic, 503 if the database is
    unreachable.
    """
    checks = {"database": await check_database(request)}

    unhealthy_checks = [
        name for name, check in checks.items()
        if check.get("status") == "unhealthy"
    ]

    body = {
        "status": "unhealthy" if unhealthy_checks else "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

    if unhealthy_checks:
        logger.warning(
            "Readiness check failed",
            extra={"unhealthy": unhealthy_checks, "checks": checks},
        )
        return JSONResponse(status_code=503, content=body)

    return body
