"""
Pagination Utilities.

Page-based pagination for list endpoints: clients send ``page`` and
``limit``, responses carry ``currentPage``, ``totalPages``, ``totalItems``
and ``itemsPerPage``.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Query
from pydantic import BaseModel

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.utils import total_pages
from notekeeper.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata


@dataclass
class PageParams:
    """Pagination parameters extracted from the query string."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Number of rows to skip: ``(page - 1) * limit``."""
        return (self.page - 1) * self.limit


def get_page_params(
    page: int = Query(
        default=1,
        ge=1,
        description="Page number, starting at 1",
    ),
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Items per page (defaults to pagination.default_limit)",
    ),
) -> PageParams:
    """
    FastAPI dependency for pagination parameters.

    The limit defaults to ``pagination.default_limit`` and is capped at
    ``pagination.max_limit`` from application.yaml.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PageParams = Depends(get_page_params),
        ):
            ...
    """
    settings = get_app_config().application.pagination
    effective_limit = min(limit or settings.default_limit, settings.max_limit)
    return PageParams(page=page, limit=effective_limit)


def create_paginated_response(
    items: list[Any],
    item_schema: type[BaseModel],
    total: int,
    page: int,
    limit: int,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Args:
        items: List of items (model instances or dicts)
        item_schema: Pydantic schema to validate items
        total: Total count of matching items
        page: Current page number
        limit: Page size
        request_id: Request ID for metadata

    Returns:
        Dict matching PaginatedResponse structure, camelCase keys

    Usage:
        return create_paginated_response(
            items=notes,
            item_schema=NoteResponse,
            total=42,
            page=1,
            limit=10,
        )
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json", by_alias=True)
        for item in items
    ]

    pagination = PaginationInfo(
        current_page=page,
        total_pages=total_pages(total, limit),
        total_items=total,
        items_per_page=limit,
    )

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json", by_alias=True)
