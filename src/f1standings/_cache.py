"""In-memory TTL cache for upstream responses."""

from __future__ import annotations

import time
from typing import Any, Callable


class TTLCache:
    """Maps request keys to payloads that expire ``ttl`` seconds after storage."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached payload, or None when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, data = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[key]
            return None
        return data

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = (self._clock(), data)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
