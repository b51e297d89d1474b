"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from f1standings.constants import DEFAULT_BASE_URL
from f1standings.exceptions import (
    OpenF1ConnectionError,
    OpenF1TimeoutError,
    OpenF1ValidationError,
    PermanentHTTPError,
    RateLimitedError,
)

DEFAULT_TIMEOUT = 30.0


def _handle_response(response: httpx.Response) -> list[dict[str, Any]]:
    """Validate response status and return parsed JSON."""
    if response.status_code == 429:
        raise RateLimitedError(response.text or "Too Many Requests")
    if response.status_code >= 400:
        raise PermanentHTTPError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        return response.json()  # type: ignore[no-any-return]
    except ValueError as exc:
        raise OpenF1ValidationError(
            f"Response from {response.url.path} is not valid JSON: {exc}"
        ) from exc


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """Perform a single async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise OpenF1ConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise OpenF1TimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise OpenF1ConnectionError(str(exc)) from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()
