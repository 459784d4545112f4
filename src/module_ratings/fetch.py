"""HTTP collaborator for checks that read remote provider APIs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from module_ratings.errors import FetchError


@runtime_checkable
class RequestClient(Protocol):
    """Protocol for the HTTP client handed to checks."""

    def get(self, url: str) -> httpx.Response:
        """GET a URL. Transport and non-2xx failures raise ``httpx.HTTPError``."""
        ...


class HttpxRequestClient:
    """Synchronous ``httpx`` client with the configured timeout and user agent."""

    def __init__(
        self,
        *,
        timeout_s: float = 10.0,
        user_agent: str = "module-ratings/0.1",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_s,
            headers={"Accept": "application/json", "User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def get(self, url: str) -> httpx.Response:
        response = self._client.get(url)
        response.raise_for_status()
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxRequestClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a single JSON fetch.

    ``payload`` is set only for a non-empty JSON object. ``error`` is set when
    the request or decode failed. Both unset means the provider answered with
    nothing usable.
    """

    payload: dict[str, Any] | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def fetch_json(
    client: RequestClient,
    url: str,
    logger: logging.Logger | None = None,
) -> FetchResult:
    """GET ``url`` and decode a JSON object, never raising."""
    try:
        body = client.get(url).json()
    except httpx.HTTPStatusError as exc:
        error = FetchError(
            f"request failed ({exc.response.status_code}): {exc}",
            url=url,
            retryable=exc.response.status_code >= 500,
        )
    except httpx.HTTPError as exc:
        error = FetchError(f"request failed: {exc}", url=url)
    except ValueError as exc:
        error = FetchError(f"invalid JSON body: {exc}", url=url, retryable=False)
    except Exception as exc:
        error = FetchError(f"unexpected fetch error: {exc}", url=url, retryable=False)
    else:
        if not isinstance(body, dict) or not body:
            return FetchResult()
        return FetchResult(payload=body)

    if logger is not None:
        logger.debug("%s (%s)", error, url)
    return FetchResult(error=error)
