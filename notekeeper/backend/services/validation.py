"""
Note Validation.

Synchronous, side-effect free checks run on request data before any
database access. Each failure raises a specific ValidationError subclass
so clients get a precise message and error code.
"""

import re
from typing import Any

from notekeeper.backend.core.exceptions import (
    EmptyFieldError,
    FieldTypeError,
    InvalidEnumError,
    InvalidIdentifierError,
    InvalidTypeError,
    LengthExceededError,
    MissingFieldError,
)
from notekeeper.backend.models.note import (
    CATEGORY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Priority,
)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

PRIORITY_VALUES = tuple(p.value for p in Priority)


def _is_omitted(value: Any) -> bool:
    """null and "" mean "use the default" for optional fields."""
    return value is None or value == ""


def validate_note_payload(payload: dict[str, Any]) -> None:
    """
    Validate a note create/update body.

    Checks run in a fixed order and the first failure wins.

    Raises:
        MissingFieldError: title or content absent
        FieldTypeError: title or content not a string
        EmptyFieldError: title or content blank after trimming
        LengthExceededError: title over 200 chars, or bad category
        InvalidEnumError: priority not low/medium/high
        InvalidTypeError: tags not a list of strings
    """
    title = payload.get("title")
    content = payload.get("content")

    if title is None or content is None:
        raise MissingFieldError(
            "Title and content are required",
            hint="Make sure both title and content are provided",
        )

    if not isinstance(title, str) or not isinstance(content, str):
        raise FieldTypeError("Title and content must be strings")

    if not title.strip() or not content.strip():
        raise EmptyFieldError("Title and content cannot be empty or only whitespace")

    if len(title) > TITLE_MAX_LENGTH:
        raise LengthExceededError(
            f"Title must be less than {TITLE_MAX_LENGTH} characters",
            currentLength=len(title),
        )

    priority = payload.get("priority")
    if not _is_omitted(priority) and priority not in PRIORITY_VALUES:
        raise InvalidEnumError(
            f"Priority must be one of: {', '.join(PRIORITY_VALUES)}",
            received=priority,
        )

    tags = payload.get("tags")
    if not _is_omitted(tags) and (
        not isinstance(tags, list) or any(not isinstance(tag, str) for tag in tags)
    ):
        raise InvalidTypeError(
            "Tags must be an array of strings",
            example=["tag1", "tag2", "tag3"],
        )

    category = payload.get("category")
    if category is not None and (
        not isinstance(category, str) or len(category) > CATEGORY_MAX_LENGTH
    ):
        raise LengthExceededError(
            f"Category must be a string with less than {CATEGORY_MAX_LENGTH} characters"
        )


def validate_note_id(note_id: str) -> str:
    """
    Check that a path identifier looks like a UUID.

    Returns:
        The identifier, unchanged

    Raises:
        InvalidIdentifierError: If the identifier is not UUID-shaped
    """
    if not UUID_PATTERN.fullmatch(note_id):
        raise InvalidIdentifierError(
            received=note_id,
            expected="UUID format (e.g., 123e4567-e89b-12d3-a456-426614174000)",
        )
    return note_id
