"""
Todo Client — State Holder
============================

What:  TodoClient keeps the in-memory todo list in sync with the server.
How:   Every action awaits the server and only then updates `todos` from the
       response (fetch-after-mutate, never optimistic). One status enum
       (idle | loading | error) gates all actions: while a request is in
       flight every control is disabled and new actions are refused.

State:
    todos:   List[TodoItem], server order preserved
    status:  ClientStatus
    error:   last failure message, or None
    draft:   text of the add-task input

Lifetime:
    mount() loads the list. dispatch() runs an action as an asyncio task
    owned by the client; unmount() cancels those tasks, and no state is
    modified after it returns.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Set, TypeVar

from todo_client.api import ApiError, TodoApi, TodoItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class TodoClient:
    """
    Client-side todo list state.

    Each action returns True when the server accepted it and the local list
    was updated, False when it was ignored or failed.
    """

    FETCH_FAILED = "Failed to fetch todos"
    ADD_FAILED = "Failed to add todo"
    UPDATE_FAILED = "Failed to update todo"
    DELETE_FAILED = "Failed to delete todo"

    def __init__(self, api: TodoApi):
        self.api = api
        self.todos: List[TodoItem] = []
        self.status = ClientStatus.IDLE
        self.error: Optional[str] = None
        self.draft = ""
        self._tasks: Set[asyncio.Task] = set()
        self._unmounted = False

    async def __aenter__(self) -> "TodoClient":
        await self.mount()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def busy(self) -> bool:
        return self.status is ClientStatus.LOADING

    @property
    def unmounted(self) -> bool:
        return self._unmounted

    # ── Lifetime ──────────────────────────────────────────────────────────

    async def mount(self) -> bool:
        """Initial load of the list."""
        return await self.load()

    def dispatch(self, action: Callable[..., Awaitable[bool]], *args) -> "asyncio.Task[bool]":
        """
        Run a user-triggered action as a task scoped to this client.

        Example:
            client.dispatch(client.toggle, todo.id)
        """
        if self._unmounted:
            raise RuntimeError("TodoClient is unmounted")
        task = asyncio.ensure_future(action(*args))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def unmount(self) -> None:
        """Cancel in-flight actions; state is frozen from here on."""
        self._unmounted = True
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        await self.unmount()
        await self.api.aclose()

    # ── Actions ───────────────────────────────────────────────────────────

    async def load(self) -> bool:
        """Replace `todos` wholesale with the server's list."""
        def apply(todos: List[TodoItem]) -> None:
            self.todos = list(todos)

        return await self._run(self.FETCH_FAILED, self.api.list_todos, apply)

    async def submit(self, title: Optional[str] = None) -> bool:
        """
        Add a todo from `title`, or from `draft` when no title is given.

        Blank or whitespace-only titles are ignored without a request.
        On success the new todo goes to the head of the list and the draft
        is cleared.
        """
        text = (self.draft if title is None else title).strip()
        if not text:
            return False

        def apply(todo: TodoItem) -> None:
            self.todos = [todo, *self.todos]
            self.draft = ""

        return await self._run(self.ADD_FAILED, lambda: self.api.create_todo(text), apply)

    async def toggle(self, todo_id: str) -> bool:
        """
        Flip `completed` for a cached todo.

        Sends the current title along with the inverted flag, then replaces
        the entry in place with the server's version.
        """
        current = self.find(todo_id)
        if current is None:
            return False

        def apply(updated: TodoItem) -> None:
            self.todos = [updated if t.id == todo_id else t for t in self.todos]

        return await self._run(
            self.UPDATE_FAILED,
            lambda: self.api.update_todo(
                todo_id, title=current.title, completed=not current.completed
            ),
            apply,
        )

    async def delete(self, todo_id: str) -> bool:
        def apply(_: str) -> None:
            self.todos = [t for t in self.todos if t.id != todo_id]

        return await self._run(self.DELETE_FAILED, lambda: self.api.delete_todo(todo_id), apply)

    def find(self, todo_id: str) -> Optional[TodoItem]:
        return next((t for t in self.todos if t.id == todo_id), None)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _run(
        self,
        failure_message: str,
        call: Callable[[], Awaitable[T]],
        apply: Callable[[T], None],
    ) -> bool:
        if self._unmounted:
            return False
        if self.busy:
            logger.debug("Ignoring action while a request is in flight")
            return False

        self.status = ClientStatus.LOADING
        self.error = None
        try:
            result = await call()
        except ApiError as e:
            if self._unmounted:
                return False
            logger.warning("%s: %s", failure_message, e.message)
            self._fail(failure_message)
            return False
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("%s: unexpected error", failure_message)
            if not self._unmounted:
                self._fail(failure_message)
            raise
        finally:
            # LOADING never outlives the request
            if self.status is ClientStatus.LOADING and not self._unmounted:
                self.status = ClientStatus.IDLE

        if self._unmounted:
            return False
        apply(result)
        self.status = ClientStatus.IDLE
        return True

    def _fail(self, message: str) -> None:
        self.error = message
        self.status = ClientStatus.ERROR
