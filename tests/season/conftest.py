"""Fake OpenF1 upstream for the season-layer tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
import pytest_asyncio
import respx

from f1standings.season.aggregator import SeasonAggregator
from f1standings.season.registry import EntityRegistry
from f1standings.season.reconciler import ResultReconciler
from tests.conftest import BASE_URL

SEASON_END = datetime(2025, 12, 31, tzinfo=timezone.utc)


class Upstream:
    """In-memory OpenF1 data served through respx routes."""

    def __init__(self) -> None:
        self.sessions: list[dict[str, Any]] = []
        self.sessions_status = 200
        self.drivers: dict[int, list[dict[str, Any]]] = {}
        self.results: dict[int, list[dict[str, Any]]] = {}
        self.positions: dict[int, list[dict[str, Any]]] = {}
        self.failing: set[int] = set()

    def install(self, router: respx.MockRouter) -> None:
        self.sessions_route = router.get(f"{BASE_URL}/sessions").mock(
            side_effect=self._sessions,
        )
        self.drivers_route = router.get(f"{BASE_URL}/drivers").mock(
            side_effect=self._by_session(self.drivers),
        )
        self.results_route = router.get(f"{BASE_URL}/session_result").mock(
            side_effect=self._by_session(self.results),
        )
        self.positions_route = router.get(f"{BASE_URL}/position").mock(
            side_effect=self._by_session(self.positions),
        )

    def _sessions(self, request: httpx.Request) -> httpx.Response:
        if self.sessions_status != 200:
            return httpx.Response(self.sessions_status, text="unavailable")
        return httpx.Response(200, json=self.sessions)

    def _by_session(self, table: dict[int, list[dict[str, Any]]]):
        def handler(request: httpx.Request) -> httpx.Response:
            key = int(request.url.params["session_key"])
            if key in self.failing:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, json=table.get(key, []))

        return handler


@pytest.fixture
def upstream():
    fake = Upstream()
    with respx.mock(assert_all_called=False) as router:
        fake.install(router)
        yield fake


@pytest.fixture
def registry(fast_client) -> EntityRegistry:
    return EntityRegistry(fast_client)


@pytest.fixture
def reconciler(fast_client) -> ResultReconciler:
    return ResultReconciler(fast_client)


@pytest_asyncio.fixture
async def aggregator(fast_client):
    season = SeasonAggregator(
        fast_client, 2025, refresh_interval=3600, now=lambda: SEASON_END,
    )
    yield season
    await season.close()
