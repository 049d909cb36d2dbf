"""
Base Schemas.

Standard API response schemas. JSON field names are camelCase on the wire
(``currentPage``, ``isPinned``) while Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from notekeeper.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResponseMetadata(CamelModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ApiResponse(CamelModel, Generic[DataT]):
    """
    Standard API response envelope.

    All successful API responses use this structure for consistency.
    """

    success: bool = True
    data: DataT | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class MessageResponse(ApiResponse[DataT], Generic[DataT]):
    """Response envelope for mutations, carrying a status message."""

    message: str


class StatusResponse(CamelModel):
    """Response without a body, only a status message."""

    success: bool = True
    message: str
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class ErrorResponse(CamelModel):
    """
    Standard error response.

    Extra keyword arguments are kept as top-level fields so handlers can
    attach context such as the received value or the offending path.
    """

    success: bool = False
    message: str
    type: str
    code: str
    details: dict[str, Any] | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class PaginationInfo(CamelModel):
    """Page-based pagination metadata."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PaginatedResponse(CamelModel, Generic[DataT]):
    """Paginated list response."""

    success: bool = True
    data: list[DataT]
    pagination: PaginationInfo
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
