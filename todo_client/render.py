"""
Todo Client — Rendering
=========================

What:  Turns TodoClient state into a PageView, and a PageView into HTML.
How:   render_view() applies the display rules; render_html() only fills
       templates/todo_list.html, a Jinja2 template with autoescaping on.

Display rules:
    - an error banner whenever `error` is set
    - loading indicator while a request is in flight
    - otherwise the empty-state message when there are no todos
    - otherwise one row per todo: checkbox bound to `completed`,
      strikethrough when completed, a delete control
    - every control is disabled while a request is in flight
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

from todo_client.state import TodoClient

PAGE_TITLE = "TODO List"
LOADING_MESSAGE = "Loading..."
EMPTY_MESSAGE = "No tasks found. Add a new task!"
INPUT_PLACEHOLDER = "Add a new task"
PAGE_TEMPLATE = "todo_list.html"

templates = Environment(
    loader=PackageLoader("todo_client", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class TodoRow:
    id: str
    title: str
    checked: bool
    struck: bool
    disabled: bool


@dataclass(frozen=True)
class PageView:
    draft: str = ""
    form_disabled: bool = False
    error: Optional[str] = None
    loading: bool = False
    empty_message: Optional[str] = None
    rows: Tuple[TodoRow, ...] = field(default_factory=tuple)
    title: str = PAGE_TITLE


def render_view(client: TodoClient) -> PageView:
    busy = client.busy
    rows: Tuple[TodoRow, ...] = ()
    empty_message = None

    if not busy:
        if client.todos:
            rows = tuple(
                TodoRow(
                    id=todo.id,
                    title=todo.title,
                    checked=todo.completed,
                    struck=todo.completed,
                    disabled=busy,
                )
                for todo in client.todos
            )
        else:
            empty_message = EMPTY_MESSAGE

    return PageView(
        draft=client.draft,
        form_disabled=busy,
        error=client.error,
        loading=busy,
        empty_message=empty_message,
        rows=rows,
    )


def render_html(view: PageView) -> str:
    """Serialize a PageView as an HTML fragment."""
    return templates.get_template(PAGE_TEMPLATE).render(
        view=view,
        placeholder=INPUT_PLACEHOLDER,
        loading_message=LOADING_MESSAGE,
    )
