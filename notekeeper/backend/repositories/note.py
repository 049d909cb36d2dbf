"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from typing import Any

from sqlalchemy import func, select

from notekeeper.backend.core.utils import utc_now
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.base import BaseRepository
from notekeeper.backend.repositories.note_query import (
    DEFAULT_ORDERING,
    build_filters,
    build_ordering,
    search_filter,
)
from notekeeper.backend.schemas.note import NoteListParams


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds filtered listing, search, categories and flag toggles.
    """

    model = Note

    async def list_filtered(self, params: NoteListParams) -> tuple[list[Note], int]:
        """
        Get one page of notes matching the list parameters.

        Args:
            params: Filter, sort and page options

        Returns:
            Tuple of (notes on this page, total matching notes)
        """
        filters = build_filters(params)

        result = await self.session.execute(
            select(Note)
            .where(*filters)
            .order_by(*build_ordering(params))
            .limit(params.limit)
            .offset(params.offset)
        )
        notes = list(result.scalars().all())

        total = await self.session.execute(
            select(func.count()).select_from(Note).where(*filters)
        )
        return notes, total.scalar_one()

    async def search(self, query: str) -> list[Note]:
        """
        Search non-archived notes by title or content.

        Args:
            query: Text to look for

        Returns:
            All matching notes, pinned first, most recently updated next
        """
        result = await self.session.execute(
            select(Note)
            .where(search_filter(query))
            .order_by(*DEFAULT_ORDERING)
        )
        return list(result.scalars().all())

    async def get_by_category(self, category: str) -> list[Note]:
        """Get all non-archived notes in a category."""
        result = await self.session.execute(
            select(Note)
            .where(Note.category == category)
            .where(Note.is_archived == False)  # noqa: E712
            .order_by(*DEFAULT_ORDERING)
        )
        return list(result.scalars().all())

    async def list_categories(self) -> list[str]:
        """Get the distinct categories used by any note, archived included."""
        result = await self.session.execute(
            select(Note.category).distinct().order_by(Note.category)
        )
        return list(result.scalars().all())

    async def update(self, id: str, **kwargs: Any) -> Note:
        """
        Update a note, always refreshing ``updated_at``.

        The timestamp is set explicitly because an update whose values
        match the stored ones would otherwise not touch the row.

        Raises:
            NotFoundError: If note not found
        """
        return await super().update(id, updated_at=utc_now(), **kwargs)

    async def toggle_pin(self, id: str) -> Note:
        """
        Flip the pinned flag of a note.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_by_id(id)
        return await self.update(id, is_pinned=not note.is_pinned)

    async def toggle_archive(self, id: str) -> Note:
        """
        Flip the archived flag of a note.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_by_id(id)
        return await self.update(id, is_archived=not note.is_archived)
