"""Query parameter and cache key helpers."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode


def build_query_params(**kwargs: Any) -> list[tuple[str, str]]:
    """Build a list of query parameter tuples from keyword arguments.

    ``None`` values are dropped; everything else becomes an equality filter
    in keyword order.

    Returns:
        List of (key, value) tuples suitable for httpx params.
    """
    params: list[tuple[str, str]] = []
    for key, value in kwargs.items():
        if value is None:
            continue
        params.append((key, str(value)))
    return params


def cache_key(endpoint: str, params: list[tuple[str, str]]) -> str:
    """Return the exact ``endpoint?query`` string used as the cache key."""
    if not params:
        return endpoint
    return f"{endpoint}?{urlencode(params)}"
