"""Retry policy with exponential backoff, independent of the HTTP client."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from f1standings.exceptions import (
    PermanentHTTPError,
    RateLimitedError,
    TransientNetworkError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retryable(exc: BaseException) -> bool:
    """Network failures, 429s and 5xx responses are retried; 4xx are not."""
    if isinstance(exc, (TransientNetworkError, RateLimitedError)):
        return True
    if isinstance(exc, PermanentHTTPError):
        return exc.status_code >= 500
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to attempt an operation and how long to wait in between.

    Before attempt ``n`` (n > 1) the policy waits ``base_delay * 2 ** (n - 1)``
    seconds, plus ``rate_limit_delay`` when the previous attempt was rate
    limited. Once ``max_attempts`` is spent the last error propagates.
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    rate_limit_delay: float = 1.0
    retry_on: Callable[[BaseException], bool] = is_retryable
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def backoff(self, attempt: int) -> float:
        """Delay before ``attempt`` (1-based); zero for the first attempt."""
        if attempt <= 1:
            return 0.0
        return self.base_delay * 2 ** (attempt - 1)

    async def run(self, operation: Callable[[], Awaitable[T]], label: str = "") -> T:
        """Await ``operation`` until it succeeds or the attempt budget is spent."""
        last_exc: BaseException | None = None
        for attempt in range(1, self.max_attempts + 1):
            if last_exc is not None:
                delay = self.backoff(attempt)
                if isinstance(last_exc, RateLimitedError):
                    delay += self.rate_limit_delay
                logger.info(
                    "Retry %d/%d for %s in %.2fs after %s",
                    attempt, self.max_attempts, label, delay, type(last_exc).__name__,
                )
                await self.sleep(delay)
            try:
                return await operation()
            except Exception as exc:
                if not self.retry_on(exc):
                    raise
                last_exc = exc

        assert last_exc is not None
        logger.error("Giving up on %s after %d attempts", label, self.max_attempts)
        raise last_exc
