"""Integration tests for LabelsService against a stub GitLab server.

The stub is a small FastAPI app keeping labels in memory, served by uvicorn
in a background thread for the duration of each test.
"""

import threading
import time
from collections.abc import Iterator
from typing import Any

import pytest
import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from glapi.client import APIError, Client
from glapi.labels import (
    CreateLabelOptions,
    DeleteLabelOptions,
    Label,
    ListLabelsOptions,
    UpdateLabelOptions,
)

HOST = "127.0.0.1"
PORT = 8765

API = "/api/v4/projects/{pid:path}/labels"


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "404 Label Not Found"})


def create_stub_app() -> FastAPI:
    """Create a FastAPI app mimicking GitLab's project labels API."""
    app = FastAPI()
    projects: dict[str, list[dict[str, Any]]] = {}
    next_id = iter(range(1, 10_000))

    def find(pid: str, label: str) -> dict[str, Any] | None:
        for item in projects.get(pid, []):
            if (label.isdigit() and item["id"] == int(label)) or item["name"] == label:
                return item
        return None

    @app.middleware("http")
    async def require_token(request: Request, call_next):
        if request.headers.get("PRIVATE-TOKEN") != "stub-token":
            return JSONResponse(status_code=401, content={"message": "401 Unauthorized"})
        return await call_next(request)

    @app.get(API)
    def list_labels(pid: str, response: Response, page: int = 1, per_page: int = 20):
        labels = projects.get(pid, [])
        start = (page - 1) * per_page
        total_pages = max(1, -(-len(labels) // per_page))
        response.headers["X-Total"] = str(len(labels))
        response.headers["X-Total-Pages"] = str(total_pages)
        response.headers["X-Per-Page"] = str(per_page)
        response.headers["X-Page"] = str(page)
        response.headers["X-Next-Page"] = str(page + 1) if page < total_pages else ""
        return labels[start : start + per_page]

    @app.post(API, status_code=201)
    def create_label(pid: str, body: dict[str, Any] = Body(...)):
        if not body.get("name"):
            return JSONResponse(
                status_code=400, content={"message": {"name": ["can't be blank"]}}
            )
        label = {
            "id": next(next_id),
            "name": body["name"],
            "color": body.get("color", "#428BCA"),
            "text_color": "#FFFFFF",
            "description": body.get("description"),
            "open_issues_count": 0,
            "closed_issues_count": 0,
            "open_merge_requests_count": 0,
            "subscribed": False,
            "priority": body.get("priority"),
            "is_project_label": True,
        }
        projects.setdefault(pid, []).append(label)
        return label

    @app.get(API + "/{label}")
    def get_label(pid: str, label: str):
        return find(pid, label) or _not_found()

    @app.put(API + "/{label}")
    def update_label(pid: str, label: str, body: dict[str, Any] = Body(...)):
        item = find(pid, label)
        if item is None:
            return _not_found()
        if "new_name" in body:
            item["name"] = body["new_name"]
        for key in ("color", "description", "priority"):
            if key in body:
                item[key] = body[key]
        return item

    @app.delete(API + "/{label}")
    def delete_label(pid: str, label: str):
        item = find(pid, label)
        if item is None:
            return _not_found()
        projects[pid].remove(item)
        return Response(status_code=204)

    @app.post(API + "/{label}/subscribe", status_code=201)
    def subscribe(pid: str, label: str):
        item = find(pid, label)
        if item is None:
            return _not_found()
        item["subscribed"] = True
        return item

    @app.post(API + "/{label}/unsubscribe", status_code=201)
    def unsubscribe(pid: str, label: str):
        item = find(pid, label)
        if item is None:
            return _not_found()
        item["subscribed"] = False
        return item

    return app


@pytest.fixture
def server() -> Iterator[str]:
    """Start the stub app in a background thread."""
    config = uvicorn.Config(create_stub_app(), host=HOST, port=PORT, log_level="error")
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run)
    thread.daemon = True
    thread.start()

    # Wait for server to start
    deadline = time.monotonic() + 5
    while not server.started and time.monotonic() < deadline:
        time.sleep(0.05)
    assert server.started, "stub server did not start"
    yield f"http://{HOST}:{PORT}"

    server.should_exit = True
    thread.join(timeout=2)


@pytest.fixture
def client(server: str) -> Iterator[Client]:
    """Create a Client pointed at the stub server."""
    client = Client(token="stub-token", base_url=server, timeout=5.0)
    yield client
    client.close()


@pytest.mark.integration
class TestLabelLifecycle:
    """Create, read, update, subscribe and delete against the stub."""

    def test_full_lifecycle(self, client: Client) -> None:
        created, response = client.labels.create_label(
            1, CreateLabelOptions(name="kind/bug", color="#d9534f", priority=2)
        )
        assert response.status_code == 201
        assert created.name == "kind/bug"
        assert created.priority == 2

        fetched, _ = client.labels.get_label(1, created.id)
        assert fetched == created

        updated, _ = client.labels.update_label(
            1, created.id, UpdateLabelOptions(description="Bug reported by user")
        )
        assert updated.description == "Bug reported by user"
        assert updated.color == "#d9534f"
        assert updated.priority == 2

        subscribed, _ = client.labels.subscribe_to_label(1, created.id)
        assert subscribed.subscribed is True

        response = client.labels.unsubscribe_from_label(1, created.id)
        assert response.status_code == 201

        response = client.labels.delete_label(1, created.id)
        assert response.status_code == 204

        with pytest.raises(APIError) as exc_info:
            client.labels.get_label(1, created.id)
        assert exc_info.value.status_code == 404

    def test_update_clears_priority_with_explicit_none(self, client: Client) -> None:
        """An explicit None is sent as null and clears the field."""
        created, _ = client.labels.create_label(
            1, CreateLabelOptions(name="urgent", priority=1)
        )

        updated, _ = client.labels.update_label(1, "urgent", UpdateLabelOptions(priority=None))

        assert updated.priority is None
        assert updated.name == created.name

    def test_rename_by_name(self, client: Client) -> None:
        client.labels.create_label(1, CreateLabelOptions(name="MyLabel", color="#11FF22"))

        updated, _ = client.labels.update_label(
            1, "MyLabel", UpdateLabelOptions(new_name="New Label", color="#11FF23")
        )

        assert updated.name == "New Label"
        assert updated.color == "#11FF23"

    def test_delete_by_name(self, client: Client) -> None:
        client.labels.create_label(1, CreateLabelOptions(name="MyLabel"))

        client.labels.delete_label(1, "MyLabel", DeleteLabelOptions(name="MyLabel"))

        labels, _ = client.labels.list_labels(1)
        assert labels == []


@pytest.mark.integration
class TestListAgainstStub:
    """Listing and pagination against the stub."""

    def test_pagination(self, client: Client) -> None:
        for name in ("a", "b", "c"):
            client.labels.create_label("group/project", CreateLabelOptions(name=name))

        first, response = client.labels.list_labels(
            "group/project", ListLabelsOptions(page=1, per_page=2)
        )
        assert [label.name for label in first] == ["a", "b"]
        assert response.total_items == 3
        assert response.next_page == 2

        second, response = client.labels.list_labels(
            "group/project", ListLabelsOptions(page=2, per_page=2)
        )
        assert [label.name for label in second] == ["c"]
        assert response.next_page is None
        assert all(isinstance(label, Label) for label in first + second)


@pytest.mark.integration
class TestErrorsAgainstStub:
    """Server-side errors surface as APIError."""

    def test_validation_error_message(self, client: Client) -> None:
        with pytest.raises(APIError) as exc_info:
            client.labels.create_label(1, CreateLabelOptions(color="#fff"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.server_message == "{name: [can't be blank]}"

    def test_unauthorized(self, server: str) -> None:
        with Client(token="wrong", base_url=server) as client:
            with pytest.raises(APIError) as exc_info:
                client.labels.list_labels(1)

        assert exc_info.value.status_code == 401
