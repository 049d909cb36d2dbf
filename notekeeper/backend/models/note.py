"""
Note Model.

Database model for notes, the only entity of the application.
"""

import enum

from sqlalchemy import JSON, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.backend.models.base import Base, TimestampMixin, UUIDMixin

TITLE_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50
DEFAULT_CATEGORY = "general"


class Priority(str, enum.Enum):
    """Allowed note priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    A note has a required title and content, a free-text category,
    an ordered list of tags, pin/archive flags and a priority.
    Pinned notes sort ahead of everything else in list views;
    archived notes are hidden from default listings and search.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(CATEGORY_MAX_LENGTH),
        default=DEFAULT_CATEGORY,
        nullable=False,
        index=True,
    )
    tags: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    is_pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
        index=True,
    )
    is_archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
        index=True,
    )
    priority: Mapped[str] = mapped_column(
        Enum(
            *(p.value for p in Priority),
            name="note_priority",
            native_enum=False,
            length=10,
        ),
        default=Priority.MEDIUM.value,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, pinned={self.is_pinned})>"
