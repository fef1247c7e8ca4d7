"""Shared test fixtures.

No network access: the Terraform Cloud API is faked with
``httpx.MockTransport`` routed through ``FakeTfcApi``.  All files live under
``tmp_path``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from tfcstate.client import TfcClient
from tfcstate.settings import get_settings
from tfcstate.store.local import LocalStateFile, LocalWorkspaceStore

API_URL = "https://tfc.test/api/v2"
TOKEN = "test-token"  # noqa: S105

Handler = Callable[[httpx.Request], httpx.Response]


def _without_query(url: httpx.URL) -> str:
    return str(url).split("?", 1)[0]


class FakeTfcApi:
    """Route table for a fake Terraform Cloud API.

    Routes are keyed by ``(method, url)`` where ``url`` has no query string.
    Every request is recorded in ``requests``; an unrouted request fails the
    test with a 599 response so the code under test surfaces it.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def route(
        self, method: str, url: str, status: int = 200, *, json_body: object = None, content: bytes = b""
    ) -> None:
        if json_body is not None:
            content = json.dumps(json_body).encode()
        self.routes[(method, url)] = lambda _request: httpx.Response(status, content=content)

    def api(self, method: str, path: str, status: int = 200, **kwargs: object) -> None:
        self.route(method, f"{API_URL}{path}", status, **kwargs)  # type: ignore[arg-type]

    def fail(self, method: str, url: str, exc: Exception) -> None:
        def _raise(_request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[(method, url)] = _raise

    def paths(self) -> list[tuple[str, str]]:
        return [(r.method, _without_query(r.url)) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, _without_query(request.url))
        handler = self.routes.get(key)
        if handler is None:
            return httpx.Response(599, content=f"unrouted {key}".encode())
        return handler(request)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run every test in ``tmp_path`` with no ambient TFC_* configuration."""
    for key in list(os.environ):
        if key.upper().startswith("TFC_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_api() -> FakeTfcApi:
    return FakeTfcApi()


@pytest.fixture
def client(fake_api: FakeTfcApi) -> TfcClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
    return TfcClient(TOKEN, base_url=API_URL, http_client=http_client)


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    return tmp_path / ".workspaces"


@pytest.fixture
def store(registry_path: Path) -> LocalWorkspaceStore:
    return LocalWorkspaceStore(registry_path)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "state.tfstate"


@pytest.fixture
def state_file(state_path: Path) -> LocalStateFile:
    return LocalStateFile(state_path)
