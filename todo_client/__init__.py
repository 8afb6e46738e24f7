"""
Todo Client — Package Initializer
===================================

What: Async client for the Todo API that mirrors server state in memory.

Modules:
    - config.py: ClientSettings (TODO_API_URL)
    - api.py:    TodoApi, a thin httpx wrapper over /api/todos
    - state.py:  TodoClient, the list/add/toggle/delete state machine
    - render.py: PageView construction and HTML rendering
"""

from todo_client.api import ApiError, TodoApi, TodoItem
from todo_client.render import PageView, TodoRow, render_html, render_view
from todo_client.state import ClientStatus, TodoClient

__all__ = [
    "ApiError",
    "ClientStatus",
    "PageView",
    "TodoApi",
    "TodoClient",
    "TodoItem",
    "TodoRow",
    "render_html",
    "render_view",
]
