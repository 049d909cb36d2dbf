"""
API Router.

Aggregates all endpoint routers mounted under the application's
``api_prefix`` (``/api`` by default).
"""

from fastapi import APIRouter

from notekeeper.backend.api.endpoints import notes

router = APIRouter()

# Notes endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])
