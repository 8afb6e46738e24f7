"""
Todo API — Todo Service (Business Logic)
==========================================

What:  The four todo operations: list, create, update, delete.
How:   Each method receives the request-scoped AsyncSession, applies the
       todo rules (required title, partial updates, not-found handling) and
       translates persistence failures into StoreError.
Who:   Called by the /api/todos route handlers.

Error Handling Strategy:
    ValidationError and NotFoundError are raised directly. Any other failure
    while talking to the database is wrapped in StoreError, carrying the
    operation summary as `message` and the driver's text as `error`.
    Nothing is retried.

Unit of work:
    Mutations flush and commit inside the service call, so the write is
    durable before the route returns its response.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.exceptions import NotFoundError, StoreError, TodoListError, ValidationError
from todo_api.models.todo import TITLE_MAX_LENGTH, Todo, utcnow
from todo_api.schemas.todo import DeleteResponse, TodoResponse, TodoUpdate

logger = logging.getLogger(__name__)


class TodoService:
    """
    Stateless business logic for the todo collection.

    Responsibilities:
        - list_todos():  every todo, newest first
        - create_todo(): validated insert with completed=False
        - update_todo(): partial update of title/completed
        - delete_todo(): removal by id
    """

    async def list_todos(self, db: AsyncSession) -> List[TodoResponse]:
        """
        Return all todos ordered by creation time, newest first.

        Raises:
            StoreError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Todo).order_by(desc(Todo.created_at)))
            todos = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing todos: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch todos",
                error=str(e),
                context={"error_type": type(e).__name__},
            ) from e

        return [TodoResponse.model_validate(todo) for todo in todos]

    async def create_todo(self, db: AsyncSession, title: Optional[str]) -> TodoResponse:
        """
        Persist a new todo.

        Args:
            db: Async database session
            title: Raw title from the request body (may be None)

        Returns:
            The created todo, including its generated id and timestamps

        Raises:
            ValidationError: Title missing or blank (→ 400), nothing persisted
            StoreError: Insert failed (→ 500)
        """
        clean_title = self._clean_title(title)

        now = utcnow()
        todo = Todo(
            id=uuid.uuid4(),
            title=clean_title,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(todo)
            await db.flush()
            await db.commit()
        except Exception as e:
            logger.error("Database error creating todo: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to create todo",
                error=str(e),
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Todo created: %s", todo.id)
        return TodoResponse.model_validate(todo)

    async def update_todo(
        self,
        db: AsyncSession,
        todo_id: str,
        payload: TodoUpdate,
    ) -> TodoResponse:
        """
        Apply the fields supplied in `payload` to an existing todo.

        Omitted (or null) fields keep their stored value; `id` and
        `created_at` are never touched.

        Raises:
            ValidationError: A supplied title is blank (→ 400)
            NotFoundError: No todo with this id (→ 404)
            StoreError: Query or write failed (→ 500)
        """
        key = self._parse_id(todo_id)
        changes = payload.changes()
        if "title" in changes:
            changes["title"] = self._clean_title(changes["title"])

        try:
            todo = await self._get(db, key, todo_id)
            for field, value in changes.items():
                setattr(todo, field, value)
            todo.updated_at = utcnow()
            await db.flush()
            await db.commit()
        except TodoListError:
            raise
        except Exception as e:
            logger.error("Database error updating todo %s: %s", todo_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to update todo",
                error=str(e),
                context={"todo_id": todo_id},
            ) from e

        logger.info("Todo updated: %s (%s)", todo.id, ", ".join(sorted(changes)) or "no fields")
        return TodoResponse.model_validate(todo)

    async def delete_todo(self, db: AsyncSession, todo_id: str) -> DeleteResponse:
        """
        Remove a todo.

        Raises:
            NotFoundError: No todo with this id (→ 404)
            StoreError: Query or delete failed (→ 500)
        """
        key = self._parse_id(todo_id)
        try:
            todo = await self._get(db, key, todo_id)
            await db.delete(todo)
            await db.flush()
            await db.commit()
        except TodoListError:
            raise
        except Exception as e:
            logger.error("Database error deleting todo %s: %s", todo_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to delete todo",
                error=str(e),
                context={"todo_id": todo_id},
            ) from e

        logger.info("Todo deleted: %s", todo_id)
        return DeleteResponse(message="Todo deleted successfully")

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get(self, db: AsyncSession, key: uuid.UUID, todo_id: str) -> Todo:
        result = await db.execute(select(Todo).where(Todo.id == key))
        todo = result.scalar_one_or_none()
        if todo is None:
            raise NotFoundError(resource="Todo", resource_id=todo_id)
        return todo

    @staticmethod
    def _parse_id(todo_id: str) -> uuid.UUID:
        # A malformed id cannot name an existing todo
        try:
            return uuid.UUID(str(todo_id))
        except ValueError:
            raise NotFoundError(resource="Todo", resource_id=todo_id) from None

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        if title is None or not title.strip():
            raise ValidationError(message="Title is required", field="title")
        clean = title.strip()
        if len(clean) > TITLE_MAX_LENGTH:
            raise ValidationError(
                message=f"Title must be at most {TITLE_MAX_LENGTH} characters",
                field="title",
            )
        return clean


# ── Singleton Instance ────────────────────────────────────────────────────
todo_service = TodoService()
