"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest

from glapi.client import Client

Handler = Callable[[httpx.Request], httpx.Response]


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: tests against a live stub HTTP server")


# Shared fixtures


class Mux:
    """Routes requests by exact (still escaped) path to per-test handlers.

    Every request is recorded, including the ones that hit no handler.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}
        self.requests: list[httpx.Request] = []

    def handle(self, path: str, handler: Handler) -> None:
        self.handlers[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        handler = self.handlers.get(path)
        if handler is None:
            return httpx.Response(404, json={"message": "404 Not Found"})
        return handler(request)


@pytest.fixture
def mux() -> Mux:
    """Create an empty request router."""
    return Mux()


@pytest.fixture
def client(mux: Mux) -> Iterator[Client]:
    """Create a Client whose transport is served by the mux."""
    client = Client(
        token="test-token",
        base_url="http://gitlab.test",
        transport=httpx.MockTransport(mux),
    )
    yield client
    client.close()

