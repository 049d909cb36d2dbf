"""
Note Query Builder.

Translates NoteListParams into SQLAlchemy filter and ordering clauses.
Kept separate from the repository so the rules can be tested without a
database.

Rules:
    - Search mode (non-empty ``search``): title or content contains the
      text, plus the archived flag. Category, pinned and priority are
      ignored.
    - Listing mode: each provided filter is AND-ed. ``archived`` always
      applies (default false); ``pinned`` only when supplied.
    - Ordering: pinned notes first, then the requested field.
"""

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from notekeeper.backend.models.note import Note
from notekeeper.backend.schemas.note import NoteListParams

SORT_COLUMNS = {
    "title": Note.title,
    "createdAt": Note.created_at,
    "updatedAt": Note.updated_at,
    "category": Note.category,
    "priority": Note.priority,
}


def text_match(text: str) -> ColumnElement[bool]:
    """Title or content contains ``text`` (LIKE, wildcards escaped)."""
    return or_(
        Note.title.contains(text, autoescape=True),
        Note.content.contains(text, autoescape=True),
    )


def build_filters(params: NoteListParams) -> list[ColumnElement[bool]]:
    """Build the list of conjuncts for a note listing."""
    if params.search:
        return [
            text_match(params.search),
            Note.is_archived == params.archived_flag,
        ]

    filters: list[ColumnElement[bool]] = []

    if params.category:
        filters.append(Note.category == params.category)

    filters.append(Note.is_archived == params.archived_flag)

    if params.pinned_flag is not None:
        filters.append(Note.is_pinned == params.pinned_flag)

    if params.priority:
        filters.append(Note.priority == params.priority)

    return filters


def build_ordering(params: NoteListParams) -> list[UnaryExpression]:
    """Pinned first, then the validated sort field and direction."""
    column = SORT_COLUMNS[params.sort_field]
    secondary = column.desc() if params.descending else column.asc()
    return [Note.is_pinned.desc(), secondary]


def search_filter(query: str) -> ColumnElement[bool]:
    """Predicate for the dedicated search endpoint; never matches archived notes."""
    return and_(text_match(query), Note.is_archived == False)  # noqa: E712


# Ordering shared by search and per-category listings.
DEFAULT_ORDERING = (Note.is_pinned.desc(), Note.updated_at.desc())
