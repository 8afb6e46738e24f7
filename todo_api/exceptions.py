"""
Todo API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the todo error taxonomy.
How:   Each exception carries a summary message, the underlying error text
       and an optional context dict. Global exception handlers (registered
       in main.py) catch these and return `{message, error}` JSON bodies.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    TodoListError (base)   → 500 Internal Server Error
    ├── ValidationError    → 400 Bad Request (missing/blank required field)
    ├── NotFoundError      → 404 Not Found (unknown todo id)
    └── StoreError         → 500 Internal Server Error (persistence failure)
"""

from typing import Any, Dict, Optional


class TodoListError(Exception):
    """
    Base exception for all Todo API errors.

    Attributes:
        message:  Summary returned to the client (e.g. "Failed to fetch todos")
        error:    Underlying error text, returned in the `error` field
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error = error or message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoListError):
    """
    Raised when client input fails validation.

    When:    Title missing or blank on create, blank title on update,
             malformed request body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        error: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, error=error, context=ctx)
        self.field = field


class NotFoundError(TodoListError):
    """
    Raised when a requested todo does not exist.

    SQLAlchemy returns None for missing records; the service layer turns
    that into this exception so routes never branch on None.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Todo",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        error = message
        if resource_id:
            error = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, error=error, context=ctx)


class StoreError(TodoListError):
    """
    Raised when a database operation fails.

    What:    A query, insert, update, or delete failed in the store.
    HTTP:    500 Internal Server Error
    The underlying driver message is passed through in `error`.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        error: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, error=error, context=context)
