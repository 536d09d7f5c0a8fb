"""Test configuration and shared fixtures."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from task_tracker.config import TrackerConfig
from task_tracker.registry import Registry
from task_tracker.storage.local import LocalBackend
from task_tracker.storage.remote import RemoteBackend

BASE_URL = "https://tasks.example.com"
API_KEY = "test_key_12345"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TASK_TRACKER_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("TASK_TRACKER_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Local Fixtures
# =============================================================================


@pytest.fixture
def registry() -> Registry:
    """An empty registry with the default theme."""
    return Registry()


@pytest.fixture
def state_file(tmp_path) -> Path:
    """Path for a state document that does not exist yet."""
    return tmp_path / "task_manager.yaml"


@pytest.fixture
def local_backend(state_file) -> LocalBackend:
    return LocalBackend(state_file)


# =============================================================================
# Remote Fixtures
# =============================================================================


class FakeTaskService:
    """Stub of the remote task service for httpx.MockTransport.

    Responses are registered per (method, path); unregistered routes
    answer 404. Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status)
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        self.routes[(method, path)] = respond

    def fail(self, method: str, path: str, error: Exception) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            raise error

        self.routes[(method, path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no such route")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def remote_config() -> TrackerConfig:
    return TrackerConfig(mode="remote", base_url=BASE_URL, api_key=API_KEY, timeout=5.0)


@pytest.fixture
def service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture
def remote_backend(remote_config, service) -> RemoteBackend:
    backend = RemoteBackend(remote_config, transport=service.transport)
    yield backend
    backend.close()


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_tasks_response() -> list[dict[str, Any]]:
    """Tasks as the remote service returns them."""
    return [
        {"id": 1, "name": "Write report", "description": "Q3", "eta": "Fri", "categoryId": 7},
        {"id": 2, "name": "Buy milk", "description": "2L", "eta": "Today", "categoryId": None},
        {"id": 3, "name": "Review PR", "description": "#12", "eta": "Mon", "categoryId": 7},
        {"id": 4, "name": "Old thing", "description": "", "eta": "", "categoryId": 99},
    ]
