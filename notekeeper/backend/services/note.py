"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import ValidationError
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.note import NoteRepository
from notekeeper.backend.schemas.note import NoteCreate, NoteListParams, NoteUpdate
from notekeeper.backend.services.base import BaseService
from notekeeper.backend.services.validation import validate_note_id, validate_note_payload


class NoteService(BaseService):
    """
    Service for note business logic.

    Every payload and identifier is validated before the repository
    is touched, so a rejected request never causes a partial write.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, payload: dict[str, Any]) -> Note:
        """
        Create a new note.

        Omitted fields get their defaults: category ``general``, no tags,
        not pinned, not archived, ``medium`` priority.

        Args:
            payload: Raw request body

        Returns:
            Created note

        Raises:
            ValidationError: If the payload is rejected
        """
        validate_note_payload(payload)
        data = self._parse_payload(NoteCreate, payload)

        self._log_operation("Creating note", title=data.title, category=data.category)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(**data.model_dump(mode="json")),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            InvalidIdentifierError: If the ID is not UUID-shaped
            NotFoundError: If note not found
        """
        validate_note_id(note_id)
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id(note_id),
        )

    async def list_notes(self, params: NoteListParams) -> tuple[list[Note], int]:
        """
        List one page of notes with filters and sorting.

        Args:
            params: Filter, sort and page options

        Returns:
            Tuple of (notes list, total count)
        """
        self._log_debug(
            "Listing notes",
            search=params.search,
            category=params.category,
            archived=params.archived_flag,
            pinned=params.pinned_flag,
            sort_field=params.sort_field,
            page=params.page,
        )
        return await self._execute_db_operation(
            "list_notes",
            self.repo.list_filtered(params),
        )

    async def update_note(self, note_id: str, payload: dict[str, Any]) -> Note:
        """
        Update an existing note.

        Title and content are required; other fields are only changed
        when present in the payload.

        Raises:
            InvalidIdentifierError: If the ID is not UUID-shaped
            ValidationError: If the payload is rejected
            NotFoundError: If note not found
        """
        validate_note_id(note_id)
        validate_note_payload(payload)
        data = self._parse_payload(NoteUpdate, payload)
        update_data = data.model_dump(mode="json", exclude_none=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **update_data),
        )

    async def delete_note(self, note_id: str) -> None:
        """
        Permanently delete a note.

        Raises:
            InvalidIdentifierError: If the ID is not UUID-shaped
            NotFoundError: If note not found
        """
        validate_note_id(note_id)
        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

    async def toggle_pin(self, note_id: str) -> tuple[Note, str]:
        """
        Pin an unpinned note or unpin a pinned one.

        Returns:
            Tuple of (updated note, "pinned" or "unpinned")

        Raises:
            InvalidIdentifierError: If the ID is not UUID-shaped
            NotFoundError: If note not found
        """
        validate_note_id(note_id)
        note = await self._execute_db_operation(
            "toggle_pin",
            self.repo.toggle_pin(note_id),
        )
        status = "pinned" if note.is_pinned else "unpinned"
        self._log_operation("Toggled pin", note_id=note_id, status=status)
        return note, status

    async def toggle_archive(self, note_id: str) -> tuple[Note, str]:
        """
        Archive an active note or restore an archived one.

        Returns:
            Tuple of (updated note, "archived" or "unarchived")

        Raises:
            InvalidIdentifierError: If the ID is not UUID-shaped
            NotFoundError: If note not found
        """
        validate_note_id(note_id)
        note = await self._execute_db_operation(
            "toggle_archive",
            self.repo.toggle_archive(note_id),
        )
        status = "archived" if note.is_archived else "unarchived"
        self._log_operation("Toggled archive", note_id=note_id, status=status)
        return note, status

    async def search_notes(self, query: str | None) -> list[Note]:
        """
        Search non-archived notes by title or content.

        Raises:
            ValidationError: If the query is missing or empty
        """
        if not query:
            raise ValidationError("Search query is required")

        self._log_debug("Searching notes", query=query)
        return await self._execute_db_operation(
            "search_notes",
            self.repo.search(query),
        )

    async def list_categories(self) -> list[str]:
        """Get every category in use, archived notes included."""
        return await self._execute_db_operation(
            "list_categories",
            self.repo.list_categories(),
        )

    async def get_notes_by_category(self, category: str) -> list[Note]:
        """Get the non-archived notes of one category."""
        return await self._execute_db_operation(
            "get_notes_by_category",
            self.repo.get_by_category(category),
        )
