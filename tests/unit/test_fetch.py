"""Tests for fetch_json and the httpx request client."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx

from module_ratings.errors import FetchError
from module_ratings.fetch import FetchResult, HttpxRequestClient, RequestClient, fetch_json

URL = "https://provider.example/api/thing"


def test_fetch_json_returns_payload(make_client) -> None:
    result = fetch_json(make_client({URL: {"meta": {"status": 200}}}), URL)
    assert result.ok is True
    assert result.payload == {"meta": {"status": 200}}
    assert result.error is None


def test_fetch_json_empty_object_is_not_ok(make_client) -> None:
    result = fetch_json(make_client({URL: {}}), URL)
    assert result == FetchResult()
    assert result.ok is False


def test_fetch_json_non_object_is_not_ok(make_client) -> None:
    result = fetch_json(make_client({URL: [1, 2, 3]}), URL)
    assert result.payload is None
    assert result.error is None


def test_fetch_json_invalid_body_is_error(make_client) -> None:
    result = fetch_json(make_client({URL: "<html>oops</html>"}), URL)
    assert result.ok is False
    assert isinstance(result.error, FetchError)
    assert result.error.retryable is False
    assert result.error.url == URL


def test_fetch_json_status_error_retryable_on_5xx(make_client) -> None:
    result = fetch_json(make_client({URL: httpx.Response(502)}), URL)
    assert result.error is not None
    assert result.error.retryable is True
    assert "502" in str(result.error)


def test_fetch_json_status_error_not_retryable_on_4xx(make_client) -> None:
    result = fetch_json(make_client({}), URL)
    assert result.error is not None
    assert result.error.retryable is False
    assert "404" in str(result.error)


def test_fetch_json_transport_error_logged(make_client) -> None:
    logger = MagicMock()
    result = fetch_json(make_client({URL: httpx.ConnectError("refused")}), URL, logger)
    assert result.error is not None
    assert result.error.retryable is True
    logger.debug.assert_called_once()
    assert URL in logger.debug.call_args.args


def test_fetch_json_unexpected_error_is_absorbed() -> None:
    client = MagicMock()
    client.get.side_effect = RuntimeError("boom")
    result = fetch_json(client, URL)
    assert result.error is not None
    assert "boom" in str(result.error)


def test_httpx_client_sends_headers_and_satisfies_protocol() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    with HttpxRequestClient(
        user_agent="ratings-test/1.0", transport=httpx.MockTransport(handler)
    ) as client:
        assert isinstance(client, RequestClient)
        assert client.get(URL).json() == {"ok": True}

    assert seen[0].headers["User-Agent"] == "ratings-test/1.0"
    assert seen[0].headers["Accept"] == "application/json"
