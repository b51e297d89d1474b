"""Cached, retrying, paced async client for the OpenF1 API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import TypeAdapter

from f1standings._cache import TTLCache
from f1standings._http import DEFAULT_TIMEOUT, AsyncTransport
from f1standings._params import build_query_params, cache_key
from f1standings._retry import RetryPolicy
from f1standings.api_logging import log_api_call
from f1standings.config import Settings
from f1standings.constants import DEFAULT_BASE_URL
from f1standings.exceptions import OpenF1ValidationError
from f1standings.models.driver import Driver
from f1standings.models.position import Position
from f1standings.models.session import Session
from f1standings.models.session_result import SessionResult

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 30 * 60
DEFAULT_REQUEST_DELAY = 0.5

T = TypeVar("T")


def _validate_list(model_type: type[T], data: list[dict[str, Any]]) -> list[T]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return adapter.validate_python(data)
    except Exception as exc:
        raise OpenF1ValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


class OpenF1Client:
    """Asynchronous client for the OpenF1 API.

    Responses are cached per exact ``endpoint?query`` for ``cache_ttl``
    seconds. Cache misses go through ``retry`` and are followed by a
    ``request_delay`` pause so that a sequential caller never exceeds the
    upstream rate limit.

    Usage:
        async with OpenF1Client() as f1:
            sessions = await f1.sessions(year=2025)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        retry: RetryPolicy | None = None,
        request_delay: float = DEFAULT_REQUEST_DELAY,
        transport: AsyncTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._transport = transport or AsyncTransport(base_url=base_url, timeout=timeout)
        self._cache = TTLCache(ttl=cache_ttl, clock=clock)
        self._retry = retry or RetryPolicy(sleep=sleep)
        self._request_delay = request_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenF1Client:
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            cache_ttl=settings.cache_ttl,
            retry=RetryPolicy(
                max_attempts=settings.max_attempts,
                base_delay=settings.backoff_base,
                rate_limit_delay=settings.rate_limit_delay,
            ),
            request_delay=settings.request_delay,
        )

    async def __aenter__(self) -> OpenF1Client:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    def clear_cache(self) -> None:
        self._cache.clear()

    async def fetch(self, endpoint: str, **kwargs: Any) -> list[dict[str, Any]]:
        """Return raw JSON records for ``endpoint`` filtered by ``kwargs``."""
        params = build_query_params(**kwargs)
        key = cache_key(endpoint, params)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached  # type: ignore[no-any-return]

        data = await self._retry.run(
            lambda: self._transport.get(endpoint, params), label=key,
        )
        self._cache.set(key, data)
        if self._request_delay > 0:
            await self._sleep(self._request_delay)
        return data

    async def _get(self, endpoint: str, model: type[T], **kwargs: Any) -> list[T]:
        data = await self.fetch(endpoint, **kwargs)
        return _validate_list(model, data)

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    async def drivers(self, **kwargs: Any) -> list[Driver]:
        """Get driver information (and team) for a session."""
        return await self._get("/drivers", Driver, **kwargs)

    @log_api_call
    async def position(self, **kwargs: Any) -> list[Position]:
        """Get driver position changes throughout a session."""
        return await self._get("/position", Position, **kwargs)

    @log_api_call
    async def sessions(self, **kwargs: Any) -> list[Session]:
        """Get session information (qualifying, sprint, race)."""
        return await self._get("/sessions", Session, **kwargs)

    @log_api_call
    async def session_result(self, **kwargs: Any) -> list[SessionResult]:
        """Get official standings after a session."""
        return await self._get("/session_result", SessionResult, **kwargs)
