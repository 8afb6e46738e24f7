"""Create todos table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `todos` table.
How:   PostgreSQL column types: UUID primary key (assigned by the application),
       TIMESTAMP WITH TIME ZONE.

Rollback: downgrade() drops the table (all todos are lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the todos table and its created_at index. See todo_api/models/todo.py."""
    op.create_table(
        "todos",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            comment="Unique identifier, assigned on creation",
        ),
        sa.Column(
            "title",
            sa.String(500),
            nullable=False,
            comment="Task title, never empty",
        ),
        sa.Column(
            "completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            comment="Completion flag",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this todo was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this todo was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("length(trim(title)) > 0", name="ck_todos_title_not_blank"),
    )

    # Default listing is ORDER BY created_at DESC
    op.create_index(
        "idx_todos_created_at",
        "todos",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_todos_created_at", table_name="todos")
    op.drop_table("todos")
