"""
Note Schemas.

Pydantic schemas for note API requests and responses.

Request bodies are checked field by field in
``notekeeper.backend.services.validation`` first (so clients receive the
specific validation messages); these models then carry the already
validated data with defaults applied.
"""

from datetime import datetime
from typing import Any, Generic

from pydantic import Field, field_validator

from notekeeper.backend.models.note import DEFAULT_CATEGORY, Priority
from notekeeper.backend.schemas.base import CamelModel, DataT, ResponseMetadata

SORTABLE_FIELDS = ("title", "createdAt", "updatedAt", "category", "priority")
DEFAULT_SORT_FIELD = "updatedAt"
DEFAULT_SORT_ORDER = "DESC"


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: str = Field(description="Note title", examples=["Meeting notes"])
    content: str = Field(description="Note content", examples=["Discussed the roadmap."])
    category: str = Field(default=DEFAULT_CATEGORY, description="Grouping label")
    tags: list[str] = Field(default_factory=list, description="Ordered tags")
    is_pinned: bool = Field(default=False, description="Show ahead of other notes")
    is_archived: bool = Field(default=False, description="Hide from default views")
    priority: Priority = Field(default=Priority.MEDIUM, description="Note priority")

    @field_validator("category", mode="before")
    @classmethod
    def _default_blank_category(cls, value: str | None) -> str:
        return value or DEFAULT_CATEGORY

    @field_validator("tags", mode="before")
    @classmethod
    def _default_missing_tags(cls, value: list[str] | None) -> list[str]:
        return value or []

    @field_validator("is_pinned", "is_archived", mode="before")
    @classmethod
    def _default_missing_flag(cls, value: bool | None) -> bool:
        return value or False

    @field_validator("priority", mode="before")
    @classmethod
    def _default_blank_priority(cls, value: str | None) -> str:
        return value or Priority.MEDIUM.value


class NoteUpdate(CamelModel):
    """
    Schema for updating an existing note.

    Title and content are always required; every other field is applied
    only when present in the request body.
    """

    title: str
    content: str
    category: str | None = None
    tags: list[str] | None = None
    is_pinned: bool | None = None
    is_archived: bool | None = None
    priority: Priority | None = None

    @field_validator("priority", "tags", mode="before")
    @classmethod
    def _blank_means_unchanged(cls, value: Any) -> Any:
        return None if value == "" else value


class NoteResponse(CamelModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    category: str = Field(description="Grouping label")
    tags: list[str] = Field(description="Ordered tags")
    is_pinned: bool = Field(description="Whether the note is pinned")
    is_archived: bool = Field(description="Whether the note is archived")
    priority: Priority = Field(description="Note priority")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class NoteListParams(CamelModel):
    """
    Filter, sort and page options for the note listing.

    ``archived`` and ``pinned`` keep the raw query-string value: only the
    literal string ``"true"`` enables the flag. An absent ``pinned`` means
    no pin filter at all, while an absent ``archived`` means non-archived.
    """

    search: str | None = None
    category: str | None = None
    archived: str | None = None
    pinned: str | None = None
    priority: str | None = None
    sort_by: str | None = None
    sort_order: str | None = None
    page: int = 1
    limit: int = 10

    @property
    def archived_flag(self) -> bool:
        return self.archived == "true"

    @property
    def pinned_flag(self) -> bool | None:
        if self.pinned is None:
            return None
        return self.pinned == "true"

    @property
    def sort_field(self) -> str:
        """Requested sort field, or ``updatedAt`` when not allowed."""
        if self.sort_by in SORTABLE_FIELDS:
            return self.sort_by
        return DEFAULT_SORT_FIELD

    @property
    def descending(self) -> bool:
        """Only an explicit ``ASC`` (any case) sorts ascending."""
        return (self.sort_order or DEFAULT_SORT_ORDER).upper() != "ASC"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SearchResponse(CamelModel, Generic[DataT]):
    """Free-text search results."""

    success: bool = True
    data: list[DataT]
    query: str
    count: int
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class CategoryNotesResponse(CamelModel, Generic[DataT]):
    """Notes belonging to one category."""

    success: bool = True
    data: list[DataT]
    category: str
    count: int
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
