"""
Todo API — Todo Route Handlers
================================

What:  GET/POST /api/todos and PUT/DELETE /api/todos/{id}.
How:   Extracts path/body data, delegates to TodoService, returns JSON.
Who:   Called by the todo client (todo_client.api.TodoApi).

Errors raised by the service propagate to the global handlers in main.py,
so these handlers contain no try/except.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db_session
from todo_api.schemas.todo import (
    DeleteResponse,
    ErrorResponse,
    TodoCreate,
    TodoResponse,
    TodoUpdate,
)
from todo_api.services.todo_service import todo_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Todos"])


@router.get(
    "/todos",
    response_model=List[TodoResponse],
    responses={
        200: {"description": "All todos, newest first"},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List todos",
)
async def list_todos(db: AsyncSession = Depends(get_db_session)) -> List[TodoResponse]:
    """Return every todo ordered by creation time, newest first. No pagination."""
    return await todo_service.list_todos(db)


@router.post(
    "/todos",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoResponse,
    responses={
        201: {"description": "Todo created"},
        400: {"description": "Title missing or blank", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a todo",
)
async def create_todo(
    payload: TodoCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TodoResponse:
    return await todo_service.create_todo(db, payload.title)


@router.put(
    "/todos/{todo_id}",
    response_model=TodoResponse,
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Blank title", "model": ErrorResponse},
        404: {"description": "Todo not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Update a todo",
    description=(
        "Updates `title` and/or `completed`. Fields left out of the body keep "
        "their stored value. Clients normally send both."
    ),
)
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> TodoResponse:
    return await todo_service.update_todo(db, todo_id, payload)


@router.delete(
    "/todos/{todo_id}",
    response_model=DeleteResponse,
    responses={
        200: {"description": "Todo deleted"},
        404: {"description": "Todo not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await todo_service.delete_todo(db, todo_id)
