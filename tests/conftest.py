"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

The remote record API is replaced by FakeRecordStore, an in-memory store
served through httpx.MockTransport. It implements the same endpoints and
status codes as the real API, so client code runs unchanged against it.
"""

import itertools
import json
import logging
from collections.abc import Iterator
from typing import Any
from urllib.parse import unquote

import httpx
import pytest

from crud_client.core import logging as logging_module
from crud_client.core.config import get_app_config, get_settings
from crud_client.core.logging import setup_logging
from crud_client.records.client import RecordClient
from crud_client.records.schemas import ClientConfig

TEST_BASE_URL = "https://records.test/"


class FakeRecordStore:
    """In-memory record API: POST/GET/PUT/DELETE under /records."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self._ids: Iterator[str] = iter(())
        self._counter = itertools.count(1)

    def queue_ids(self, *ids: str) -> None:
        """Make the next creates without an id receive these ids, in order."""
        self._ids = iter(ids)

    def _next_id(self) -> str:
        return next(self._ids, None) or f"rec-{next(self._counter)}"

    def _stamp(self, body: dict[str, Any]) -> dict[str, Any]:
        body["_etag"] = f'"{next(self._counter):04d}"'
        return body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "injected failure"})

        path = request.url.raw_path.decode().split("?", 1)[0]
        segments = [unquote(s) for s in path.strip("/").split("/")]
        if segments[0] != "records" or len(segments) > 2:
            return httpx.Response(404, json={"message": "no such route"})

        if len(segments) == 1:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.records.values()))
            if request.method == "POST":
                return self._create(json.loads(request.content))
            return httpx.Response(405)

        record_id = segments[1]
        if record_id not in self.records:
            return httpx.Response(404, json={"message": f"{record_id} not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self.records[record_id])
        if request.method == "PUT":
            return self._replace(record_id, request)
        if request.method == "DELETE":
            del self.records[record_id]
            return httpx.Response(204)
        return httpx.Response(405)

    def _create(self, body: dict[str, Any]) -> httpx.Response:
        record_id = body.get("id") or self._next_id()
        if record_id in self.records:
            return httpx.Response(409, json={"message": f"{record_id} already exists"})
        body["id"] = record_id
        self.records[record_id] = self._stamp(body)
        return httpx.Response(201, json=self.records[record_id])

    def _replace(self, record_id: str, request: httpx.Request) -> httpx.Response:
        expected = request.headers.get("If-Match")
        if expected and expected != self.records[record_id]["_etag"]:
            return httpx.Response(412, json={"message": "etag mismatch"})
        body = json.loads(request.content)
        body["id"] = record_id
        self.records[record_id] = self._stamp(body)
        return httpx.Response(200, json=self.records[record_id])


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    """Route structlog through stdlib with no console handler so CLI output stays clean."""
    setup_logging(level="WARNING", enable_console=False, enable_file_logging=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers and level; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging_module._logging_config = None


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture(autouse=True)
def _no_env_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CRUD_BASE_URL out of the tests."""
    monkeypatch.delenv("CRUD_BASE_URL", raising=False)


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def transport(store: FakeRecordStore) -> httpx.MockTransport:
    return httpx.MockTransport(store.handler)


@pytest.fixture
def record_client(transport: httpx.MockTransport) -> RecordClient:
    """RecordClient talking to the in-memory store."""
    return RecordClient(ClientConfig(base_url=TEST_BASE_URL), transport=transport)
