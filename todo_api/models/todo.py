"""
Todo API — Todo SQLAlchemy Model
==================================

What:  ORM model representing the `todos` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by TodoService for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, generated on creation, never reused
    - title: required, non-empty (checked by the service, and by a CHECK constraint)
    - completed: false on creation
    - created_at / updated_at: UTC, timezone-aware
    - Index on created_at DESC for the default "newest first" listing
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.database import Base

TITLE_MAX_LENGTH = 500


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Todo(Base):
    """
    A single task in the todo list.

    Lifecycle:
        1. Created with completed=False (id, created_at assigned here)
        2. Updated any number of times (title and/or completed)
        3. Deleted — rows are removed, there is no soft delete
    """

    __tablename__ = "todos"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier, assigned on creation",
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Task title, never empty",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        comment="Completion flag",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this todo was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this todo was last modified (UTC)",
    )

    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="ck_todos_title_not_blank"),
        Index("idx_todos_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Todo(id={self.id}, title='{self.title}', "
            f"completed={self.completed})>"
        )
