"""
Todo API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between client and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Wire format uses camelCase (`createdAt`, `updatedAt`); Python code uses
snake_case. Response models serialize by alias.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class TodoCreate(BaseModel):
    """
    Body of POST /api/todos.

    `title` is optional at the schema level so a missing title reaches the
    service and is reported as a 400 ValidationError ("Title is required")
    rather than FastAPI's generic schema error.
    """
    title: Optional[str] = Field(default=None, description="Title of the new todo")

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy milk"}},
    )


class TodoUpdate(BaseModel):
    """
    Body of PUT /api/todos/{id}.

    Only fields present in the body are applied; use `model_fields_set`
    to tell an omitted field from an explicit value.
    """
    title: Optional[str] = Field(default=None, description="New title (must not be blank)")
    completed: Optional[bool] = Field(default=None, description="New completion state")

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy milk", "completed": True}},
    )

    def changes(self) -> dict:
        """Fields explicitly supplied with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """Full representation of a todo, as returned by every todo endpoint."""
    id: uuid.UUID = Field(description="Unique todo identifier (UUID)")
    title: str = Field(description="Task title")
    completed: bool = Field(description="Whether the task is done")
    created_at: datetime = Field(description="When the todo was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the todo was last modified (UTC ISO 8601)")

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """Stored values are UTC; SQLite returns them without an offset."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DeleteResponse(BaseModel):
    message: str = Field(default="Todo deleted successfully")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "message": "Failed to fetch todos",
            "error": "connection refused",
            "request_id": "a1b2c3d4"
        }
    """
    message: str = Field(description="Human-readable error summary")
    error: str = Field(description="Underlying error message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
