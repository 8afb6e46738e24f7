"""
Todo Client — HTTP API Wrapper
================================

What:  Async calls to the four /api/todos endpoints.
How:   httpx.AsyncClient; every transport failure, non-2xx response or
       unparseable body is raised as ApiError, carrying the server's
       `message`/`error` fields when it sent them.
Who:   Used by TodoClient (state.py). Tests inject an httpx.MockTransport or
       an ASGITransport bound to the FastAPI app.

No retries and no custom timeouts: a request either resolves or fails.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from todo_client.config import ClientSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TodoItem(BaseModel):
    """A todo as the client sees it (parsed from the camelCase wire format)."""
    id: str
    title: str
    completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


_TODO_LIST = TypeAdapter(List[TodoItem])


class ApiError(Exception):
    """
    Raised for any failed API call.

    Attributes:
        message:      Server's `message` field, or a transport description
        status_code:  HTTP status, None for transport failures
        error:        Server's `error` field when present
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(message)


def _json_object(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class TodoApi:
    """
    Async wrapper over the todos collection.

    Usage:
        async with TodoApi() as api:
            todos = await api.list_todos()
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = (api_url or ClientSettings().api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def __aenter__(self) -> "TodoApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Endpoints ─────────────────────────────────────────────────────────

    async def list_todos(self) -> List[TodoItem]:
        response = await self._request("GET", self.api_url)
        return self._parse(response, _TODO_LIST.validate_python)

    async def create_todo(self, title: str) -> TodoItem:
        response = await self._request("POST", self.api_url, json={"title": title})
        return self._parse(response, TodoItem.model_validate)

    async def update_todo(
        self,
        todo_id: str,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> TodoItem:
        """PUT only the fields that were given."""
        body: Dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed
        response = await self._request("PUT", self._item_url(todo_id), json=body)
        return self._parse(response, TodoItem.model_validate)

    async def delete_todo(self, todo_id: str) -> str:
        """Returns the server's confirmation message."""
        response = await self._request("DELETE", self._item_url(todo_id))
        return _json_object(response).get("message", "")

    # ── Helpers ───────────────────────────────────────────────────────────

    def _item_url(self, todo_id: str) -> str:
        return f"{self.api_url}/{todo_id}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = _json_object(e.response)
            status = e.response.status_code
            logger.debug("%s %s failed with %d: %s", method, url, status, body)
            raise ApiError(
                body.get("message") or f"HTTP {status}",
                status_code=status,
                error=body.get("error"),
            ) from e
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise ApiError(f"Request failed: {e}") from e
        return response

    @staticmethod
    def _parse(response: httpx.Response, parse: Callable[[Any], T]) -> T:
        # A 2xx reply that is not the expected JSON (e.g. a proxy error page)
        # is a failed call like any other
        try:
            return parse(response.json())
        except (ValueError, ValidationError) as e:
            logger.debug("Unparseable response from %s: %s", response.request.url, e)
            raise ApiError(
                "Unexpected response from server",
                status_code=response.status_code,
                error=str(e),
            ) from e
