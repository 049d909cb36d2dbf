"""create notes table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column(
            "priority",
            sa.Enum(
                "low", "medium", "high",
                name="note_priority",
                native_enum=False,
                length=10,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_category", "notes", ["category"])
    op.create_index("ix_notes_is_pinned", "notes", ["is_pinned"])
    op.create_index("ix_notes_is_archived", "notes", ["is_archived"])
    op.create_index("ix_notes_priority", "notes", ["priority"])


def downgrade() -> None:
    op.drop_index("ix_notes_priority", table_name="notes")
    op.drop_index("ix_notes_is_archived", table_name="notes")
    op.drop_index("ix_notes_is_pinned", table_name="notes")
    op.drop_index("ix_notes_category", table_name="notes")
    op.drop_table("notes")
