"""Shared fixtures: isolated environment and a recording fake HTTP transport."""

from typing import Any, List, Optional

import httpx
import pytest

from exploro_mcp.config import Settings
from exploro_mcp.http_client import ApiClient

ENV_VARS = (
    "EXPLORO_BASE_URL",
    "EXPLORO_API_KEY",
    "API_URL",
    "API_KEY",
    "EXPLORO_LOG_LEVEL",
    "EXPLORO_LOG_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    """Run every test without Exploro env vars and outside any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


class Recorder:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, json_body: Any = None):
        self.status_code = status_code
        self.json_body = {"ok": True} if json_body is None else json_body
        self.requests: List[httpx.Request] = []

    def respond(self, status_code: int = 200, json_body: Any = None) -> None:
        self.status_code = status_code
        self.json_body = json_body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        exploro_base_url="http://exploro.test",
        exploro_api_key="secret-token",
    )


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def api_client(settings, recorder):
    return ApiClient(settings, client=mock_client(recorder))


@pytest.fixture
def client_for():
    """Factory: wrap a request handler in an httpx.AsyncClient."""
    return mock_client


@pytest.fixture
def make_recorder():
    return Recorder
