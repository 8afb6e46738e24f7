"""
Todo Client Tests
===================

What:  Tests for todo_client (TodoApi, TodoClient, render_view/render_html).
How:   The server is replaced by an httpx.MockTransport handler, except in
       TestClientAgainstServer which drives the real app in-process.

Covers:
    - Fetch-after-mutate list updates and server order
    - Failure messages and unchanged state on failed actions
    - Busy gating, task cancellation on unmount
    - Rendering rules and HTML escaping
"""

import asyncio
import json

import httpx
import pytest

from todo_client import ClientStatus, PageView, TodoApi, TodoClient, render_html, render_view
from todo_client.api import ApiError
from todo_client.render import EMPTY_MESSAGE

API_URL = "http://test/api/todos"


def _todo(todo_id: str, title: str, completed: bool = False) -> dict:
    return {
        "id": todo_id,
        "title": title,
        "completed": completed,
        "createdAt": "2026-01-15T12:00:00Z",
        "updatedAt": "2026-01-15T12:00:00Z",
    }


class FakeServer:
    """Records requests and answers them from a per-method table."""

    def __init__(self, todos=None):
        self.todos = list(todos or [])
        self.requests = []
        self.fail = set()
        self.gate = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if request.method in self.fail:
            return httpx.Response(500, json={"message": "boom", "error": "store down"})

        if request.method == "GET":
            return httpx.Response(200, json=self.todos)
        if request.method == "POST":
            body = json.loads(request.content)
            todo = _todo(f"id-{len(self.requests)}", body["title"])
            self.todos.insert(0, todo)
            return httpx.Response(201, json=todo)

        todo_id = request.url.path.rsplit("/", 1)[-1]
        existing = next((t for t in self.todos if t["id"] == todo_id), None)
        if existing is None:
            return httpx.Response(404, json={"message": "Todo not found", "error": "missing"})
        if request.method == "PUT":
            existing.update(json.loads(request.content))
            return httpx.Response(200, json=existing)
        self.todos.remove(existing)
        return httpx.Response(200, json={"message": "Todo deleted successfully"})

    def methods(self):
        return [r.method for r in self.requests]


def _client(server: FakeServer) -> TodoClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(server))
    return TodoClient(TodoApi(api_url=API_URL, client=http))


async def _wait_until_busy(client: TodoClient) -> None:
    for _ in range(100):
        if client.busy:
            return
        await asyncio.sleep(0)
    raise AssertionError("client never became busy")


class TestTodoApi:

    @pytest.mark.asyncio
    async def test_update_sends_only_given_fields(self):
        server = FakeServer([_todo("1", "Buy milk")])
        async with TodoApi(api_url=API_URL, client=httpx.AsyncClient(
            transport=httpx.MockTransport(server)
        )) as api:
            await api.update_todo("1", completed=True)

        assert json.loads(server.requests[0].content) == {"completed": True}

    @pytest.mark.asyncio
    async def test_error_body_becomes_api_error(self):
        server = FakeServer()
        server.fail.add("GET")
        api = TodoApi(api_url=API_URL, client=httpx.AsyncClient(
            transport=httpx.MockTransport(server)
        ))

        with pytest.raises(ApiError) as exc_info:
            await api.list_todos()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "boom"
        assert exc_info.value.error == "store down"

    @pytest.mark.asyncio
    async def test_transport_error_becomes_api_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        api = TodoApi(api_url=API_URL, client=httpx.AsyncClient(
            transport=httpx.MockTransport(refuse)
        ))

        with pytest.raises(ApiError) as exc_info:
            await api.list_todos()

        assert exc_info.value.status_code is None


class TestTodoClientLoad:

    @pytest.mark.asyncio
    async def test_mount_loads_server_list_in_order(self):
        server = FakeServer([_todo("2", "B"), _todo("1", "A")])
        client = _client(server)

        assert await client.mount() is True

        assert [t.id for t in client.todos] == ["2", "1"]
        assert client.status is ClientStatus.IDLE
        assert client.error is None

    @pytest.mark.asyncio
    async def test_load_failure_sets_error(self):
        server = FakeServer([_todo("1", "A")])
        server.fail.add("GET")
        client = _client(server)

        assert await client.load() is False

        assert client.error == "Failed to fetch todos"
        assert client.status is ClientStatus.ERROR
        assert client.todos == []

    @pytest.mark.asyncio
    async def test_next_action_clears_error(self):
        server = FakeServer()
        server.fail.add("GET")
        client = _client(server)
        await client.load()

        server.fail.clear()
        await client.load()

        assert client.error is None
        assert client.status is ClientStatus.IDLE


class TestTodoClientSubmit:

    @pytest.mark.asyncio
    async def test_submit_prepends_server_todo(self):
        server = FakeServer([_todo("1", "A")])
        client = _client(server)
        await client.mount()

        assert await client.submit("  B  ") is True

        assert [t.title for t in client.todos] == ["B", "A"]
        assert json.loads(server.requests[-1].content) == {"title": "B"}

    @pytest.mark.asyncio
    async def test_submit_uses_and_clears_draft(self):
        server = FakeServer()
        client = _client(server)
        client.draft = "Walk the dog"

        assert await client.submit() is True

        assert client.todos[0].title == "Walk the dog"
        assert client.draft == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    async def test_blank_submit_sends_nothing(self, title):
        server = FakeServer()
        client = _client(server)

        assert await client.submit(title) is False

        assert server.requests == []
        assert client.todos == []

    @pytest.mark.asyncio
    async def test_submit_failure_keeps_draft(self):
        server = FakeServer()
        server.fail.add("POST")
        client = _client(server)
        client.draft = "Buy milk"

        assert await client.submit() is False

        assert client.error == "Failed to add todo"
        assert client.draft == "Buy milk"
        assert client.todos == []


class TestTodoClientToggle:

    @pytest.mark.asyncio
    async def test_toggle_sends_title_and_inverted_flag(self):
        server = FakeServer([_todo("2", "B"), _todo("1", "A")])
        client = _client(server)
        await client.mount()

        assert await client.toggle("1") is True

        assert json.loads(server.requests[-1].content) == {"title": "A", "completed": True}
        assert [t.id for t in client.todos] == ["2", "1"]
        assert client.find("1").completed is True

    @pytest.mark.asyncio
    async def test_failed_toggle_leaves_checkbox_unchanged(self):
        server = FakeServer([_todo("1", "A")])
        client = _client(server)
        await client.mount()
        server.fail.add("PUT")

        assert await client.toggle("1") is False

        assert client.error == "Failed to update todo"
        assert client.find("1").completed is False
        view = render_view(client)
        assert view.rows[0].checked is False

    @pytest.mark.asyncio
    async def test_toggle_unknown_id_is_ignored(self):
        server = FakeServer()
        client = _client(server)

        assert await client.toggle("missing") is False
        assert server.requests == []


class TestTodoClientDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_entry(self):
        server = FakeServer([_todo("2", "B"), _todo("1", "A")])
        client = _client(server)
        await client.mount()

        assert await client.delete("1") is True

        assert [t.id for t in client.todos] == ["2"]

    @pytest.mark.asyncio
    async def test_delete_failure_keeps_entry(self):
        server = FakeServer([_todo("1", "A")])
        client = _client(server)
        await client.mount()
        server.fail.add("DELETE")

        assert await client.delete("1") is False

        assert client.error == "Failed to delete todo"
        assert [t.id for t in client.todos] == ["1"]


class TestUnexpectedResponses:
    """2xx replies whose body is not the expected JSON."""

    @staticmethod
    def _scripted(*responses):
        sent = []
        replies = list(responses)

        def handler(request):
            sent.append(request.method)
            return replies.pop(0)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TodoClient(TodoApi(api_url=API_URL, client=http)), sent

    @pytest.mark.asyncio
    async def test_html_page_is_an_api_error(self):
        client, _ = self._scripted(
            httpx.Response(200, text="<html>proxy page</html>",
                           headers={"Content-Type": "text/html"}),
        )

        with pytest.raises(ApiError) as exc_info:
            await client.api.list_todos()

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_html_page_does_not_leave_client_busy(self):
        client, sent = self._scripted(
            httpx.Response(200, text="<html>proxy page</html>",
                           headers={"Content-Type": "text/html"}),
            httpx.Response(200, json=[_todo("1", "A")]),
        )

        assert await client.load() is False
        assert client.status is ClientStatus.ERROR
        assert client.error == "Failed to fetch todos"

        assert await client.load() is True
        assert sent == ["GET", "GET"]
        assert client.status is ClientStatus.IDLE
        assert [t.id for t in client.todos] == ["1"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"todos": []}, [{"name": "no id"}], 42])
    async def test_wrong_shape_list_is_reported(self, body):
        client, _ = self._scripted(httpx.Response(200, json=body))

        assert await client.load() is False
        assert client.status is not ClientStatus.LOADING
        assert client.error == "Failed to fetch todos"

    @pytest.mark.asyncio
    async def test_wrong_shape_create_keeps_draft(self):
        client, _ = self._scripted(httpx.Response(201, json={"ok": True}))
        client.draft = "Buy milk"

        assert await client.submit() is False

        assert client.error == "Failed to add todo"
        assert client.draft == "Buy milk"
        assert client.todos == []
        assert not client.busy

    @pytest.mark.asyncio
    async def test_unexpected_exception_still_releases_busy(self):
        def explode(request):
            raise RuntimeError("handler bug")

        http = httpx.AsyncClient(transport=httpx.MockTransport(explode))
        client = TodoClient(TodoApi(api_url=API_URL, client=http))

        with pytest.raises(RuntimeError):
            await client.load()

        assert client.status is ClientStatus.ERROR
        assert client.error == "Failed to fetch todos"


class TestTodoClientLifetime:

    @pytest.mark.asyncio
    async def test_actions_are_refused_while_busy(self):
        server = FakeServer([_todo("1", "A")])
        client = _client(server)
        await client.mount()
        server.gate = asyncio.Event()

        task = client.dispatch(client.load)
        await _wait_until_busy(client)

        assert await client.toggle("1") is False
        assert await client.submit("B") is False
        view = render_view(client)
        assert view.loading is True
        assert view.form_disabled is True
        assert view.rows == ()

        server.gate.set()
        assert await task is True
        assert server.methods() == ["GET", "GET"]
        assert client.status is ClientStatus.IDLE

    @pytest.mark.asyncio
    async def test_unmount_cancels_in_flight_action(self):
        server = FakeServer()
        client = _client(server)
        client.draft = "Buy milk"
        server.gate = asyncio.Event()

        task = client.dispatch(client.submit)
        await _wait_until_busy(client)
        await client.unmount()

        assert task.cancelled()
        assert client.todos == []
        assert client.draft == "Buy milk"
        assert client.unmounted is True

        with pytest.raises(RuntimeError):
            client.dispatch(client.load)
        assert await client.load() is False
        assert server.methods() == ["POST"]

    @pytest.mark.asyncio
    async def test_context_manager_mounts_and_closes(self):
        server = FakeServer([_todo("1", "A")])

        async with _client(server) as client:
            assert [t.id for t in client.todos] == ["1"]

        assert client.unmounted is True
        assert client.api._client.is_closed is False  # injected client is not owned


class TestRendering:

    @pytest.mark.asyncio
    async def test_empty_state(self):
        client = _client(FakeServer())
        await client.mount()

        view = render_view(client)

        assert view.empty_message == EMPTY_MESSAGE
        assert view.rows == ()
        assert EMPTY_MESSAGE in render_html(view)

    @pytest.mark.asyncio
    async def test_completed_rows_are_struck(self):
        client = _client(FakeServer([_todo("2", "B", completed=True), _todo("1", "A")]))
        await client.mount()

        view = render_view(client)

        assert [(r.title, r.checked, r.struck) for r in view.rows] == [
            ("B", True, True),
            ("A", False, False),
        ]
        html = render_html(view)
        assert '<span class="completed">B</span>' in html
        assert "<span>A</span>" in html

    @pytest.mark.asyncio
    async def test_error_banner(self):
        server = FakeServer()
        server.fail.add("GET")
        client = _client(server)
        await client.load()

        html = render_html(render_view(client))

        assert '<p class="error">Failed to fetch todos</p>' in html

    @pytest.mark.asyncio
    async def test_titles_are_escaped(self):
        client = _client(FakeServer([_todo("1", "<script>alert(1)</script>")]))
        await client.mount()

        html = render_html(render_view(client))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_draft_attribute_is_escaped(self):
        view = PageView(draft='"><img src=x>')

        html = render_html(view)

        assert '"><img' not in html
        assert 'value="&#34;&gt;&lt;img src=x&gt;"' in html

    def test_busy_page_disables_form(self):
        html = render_html(PageView(form_disabled=True, loading=True))

        assert '<p class="loading">Loading...</p>' in html
        assert '<button type="submit" disabled>Add</button>' in html
        assert "<ul>" not in html


class TestClientAgainstServer:

    @pytest.mark.asyncio
    async def test_local_list_matches_server_after_each_action(self, todo_api_client):
        client = TodoClient(todo_api_client)
        await client.mount()
        assert client.todos == []

        await client.submit("A")
        await client.submit("B")
        assert [t.title for t in client.todos] == ["B", "A"]

        b_id = client.todos[0].id
        await client.toggle(b_id)
        await client.delete(client.todos[1].id)

        local = [(t.id, t.title, t.completed) for t in client.todos]
        server = [(t.id, t.title, t.completed) for t in await todo_api_client.list_todos()]
        assert local == server == [(b_id, "B", True)]
        assert client.error is None
