import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from module_ratings.config import get_settings
from module_ratings.fetch import HttpxRequestClient

_ENV_KEYS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
    "CODECOV_API_BASE_URL",
    "SCRUTINIZER_API_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
    "HTTP_USER_AGENT",
    "COVERAGE_GOOD_THRESHOLD",
    "COVERAGE_GREAT_THRESHOLD",
)

Routes = dict[str, Any]


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_transport(routes: Routes, calls: list[str]) -> httpx.MockTransport:
    """Serve JSON bodies keyed by full URL.

    An exception route value is raised, an ``httpx.Response`` is returned
    as-is, a ``str`` is sent as a raw body and anything else is sent as JSON.
    Unknown URLs answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        calls.append(url)
        if url not in routes:
            return httpx.Response(404, json={"detail": "not found"})
        body = routes[url]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, httpx.Response):
            return body
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, text=json.dumps(body))

    return httpx.MockTransport(handler)


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def make_client(calls: list[str]) -> Callable[[Routes], HttpxRequestClient]:
    clients: list[HttpxRequestClient] = []

    def _make(routes: Routes) -> HttpxRequestClient:
        client = HttpxRequestClient(transport=build_transport(routes, calls))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
