"""
Notes API Endpoints.

REST API endpoints for note management, mounted under /api/notes.

Literal paths (/search, /categories, /category/{category}) are declared
before /{note_id} so they are not captured as identifiers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from notekeeper.backend.core.dependencies import DbSession, RequestId
from notekeeper.backend.core.pagination import (
    PageParams,
    create_paginated_response,
    get_page_params,
)
from notekeeper.backend.schemas.base import (
    ApiResponse,
    MessageResponse,
    ResponseMetadata,
    StatusResponse,
)
from notekeeper.backend.schemas.note import (
    CategoryNotesResponse,
    NoteListParams,
    NoteResponse,
    SearchResponse,
)
from notekeeper.backend.services.note import NoteService

router = APIRouter()

NOTE_EXAMPLE = {
    "title": "Learning JavaScript",
    "content": "Closures capture variables from the enclosing scope.",
    "category": "learning",
    "tags": ["javascript", "programming"],
    "priority": "high",
}


def get_list_params(
    pagination: PageParams = Depends(get_page_params),
    search: str | None = Query(
        default=None,
        description="Text to look for in title or content",
    ),
    category: str | None = Query(default=None, description="Exact category"),
    archived: str | None = Query(
        default=None,
        description='"true" lists archived notes; anything else lists active notes',
    ),
    pinned: str | None = Query(
        default=None,
        description='"true" or "false"; omit for no pin filter',
    ),
    priority: str | None = Query(default=None, description="low, medium or high"),
    sort_by: str | None = Query(
        default=None,
        alias="sortBy",
        description="title, createdAt, updatedAt, category or priority",
    ),
    sort_order: str | None = Query(
        default=None,
        alias="sortOrder",
        description="ASC or DESC (default DESC)",
    ),
) -> NoteListParams:
    """Collect list query parameters into a NoteListParams."""
    return NoteListParams(
        search=search,
        category=category,
        archived=archived,
        pinned=pinned,
        priority=priority,
        sort_by=sort_by,
        sort_order=sort_order,
        page=pagination.page,
        limit=pagination.limit,
    )


@router.get("/", include_in_schema=False)
@router.get(
    "",
    summary="List notes (paginated)",
    description="Filter, search, sort and page through notes. Pinned notes come first.",
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
    params: NoteListParams = Depends(get_list_params),
) -> dict[str, Any]:
    """List notes with filters and pagination."""
    service = NoteService(db)
    notes, total = await service.list_notes(params)

    return create_paginated_response(
        items=notes,
        item_schema=NoteResponse,
        total=total,
        page=params.page,
        limit=params.limit,
        request_id=request_id,
    )


@router.get(
    "/search",
    response_model=SearchResponse[NoteResponse],
    summary="Search notes",
    description="Search title and content of non-archived notes.",
)
async def search_notes(
    db: DbSession,
    request_id: RequestId,
    q: str | None = Query(default=None, description="Search query"),
) -> SearchResponse[NoteResponse]:
    """Search notes by title or content."""
    service = NoteService(db)
    notes = await service.search_notes(q)
    return SearchResponse[NoteResponse](
        data=[NoteResponse.model_validate(note) for note in notes],
        query=q,
        count=len(notes),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/categories",
    response_model=ApiResponse[list[str]],
    summary="List categories",
    description="Distinct categories across all notes, archived included.",
)
async def list_categories(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[str]]:
    """List categories in use."""
    service = NoteService(db)
    categories = await service.list_categories()
    return ApiResponse[list[str]](
        data=categories,
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/category/{category}",
    response_model=CategoryNotesResponse[NoteResponse],
    summary="Notes in a category",
    description="Non-archived notes of one category, pinned first.",
)
async def get_notes_by_category(
    category: str,
    db: DbSession,
    request_id: RequestId,
) -> CategoryNotesResponse[NoteResponse]:
    """Get notes of a category."""
    service = NoteService(db)
    notes = await service.get_notes_by_category(category)
    return CategoryNotesResponse[NoteResponse](
        data=[NoteResponse.model_validate(note) for note in notes],
        category=category,
        count=len(notes),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/",
    response_model=MessageResponse[NoteResponse],
    status_code=201,
    include_in_schema=False,
)
@router.post(
    "",
    response_model=MessageResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a note. Title and content are required.",
)
async def create_note(
    db: DbSession,
    request_id: RequestId,
    payload: dict[str, Any] = Body(..., examples=[NOTE_EXAMPLE]),
) -> MessageResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(payload)
    return MessageResponse[NoteResponse](
        data=NoteResponse.model_validate(note),
        message="Note created successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return ApiResponse[NoteResponse](
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}",
    response_model=MessageResponse[NoteResponse],
    summary="Update a note",
    description="Replace title and content; other fields change only when sent.",
)
async def update_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
    payload: dict[str, Any] = Body(..., examples=[NOTE_EXAMPLE]),
) -> MessageResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, payload)
    return MessageResponse[NoteResponse](
        data=NoteResponse.model_validate(note),
        message="Note updated successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    response_model=StatusResponse,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> StatusResponse:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)
    return StatusResponse(
        message="Note deleted successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}/pin",
    response_model=MessageResponse[NoteResponse],
    summary="Toggle pin",
    description="Pin an unpinned note or unpin a pinned one.",
)
async def toggle_pin(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> MessageResponse[NoteResponse]:
    """Toggle the pinned flag."""
    service = NoteService(db)
    note, status = await service.toggle_pin(note_id)
    return MessageResponse[NoteResponse](
        data=NoteResponse.model_validate(note),
        message=f"Note {status} successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}/archive",
    response_model=MessageResponse[NoteResponse],
    summary="Toggle archive",
    description="Archive an active note or restore an archived one.",
)
async def toggle_archive(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> MessageResponse[NoteResponse]:
    """Toggle the archived flag."""
    service = NoteService(db)
    note, status = await service.toggle_archive(note_id)
    return MessageResponse[NoteResponse](
        data=NoteResponse.model_validate(note),
        message=f"Note {status} successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )
