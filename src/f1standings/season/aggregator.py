"""Season-wide aggregation and the read API exposed to consumers."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime, timezone
from typing import Callable, Mapping

from f1standings.client import OpenF1Client
from f1standings.config import Settings
from f1standings.constants import DRIVER_NAME_OVERRIDES
from f1standings.exceptions import OpenF1Error, SeasonDataError
from f1standings.models.session import Session
from f1standings.season.catalog import SessionCatalog, start_time
from f1standings.season.reconciler import ResultReconciler, SessionOutcome
from f1standings.season.registry import EntityRegistry
from f1standings.season.standings import StandingsEngine, driver_results
from f1standings.season.types import (
    ClassifiedResult,
    DriverProfile,
    DriverStanding,
    QualifyingResult,
    SessionKind,
    Snapshot,
    TeamStanding,
)

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 30 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SeasonAggregator:
    """Builds the season snapshot and serves reads from the last committed one.

    One aggregation pass runs at a time. Sessions are fetched sequentially in
    start-time order and accumulated into a fresh snapshot that replaces the
    published one only when the pass has finished.

    Usage:
        async with SeasonAggregator.from_settings(get_settings()) as season:
            await season.initialize()
            if season.is_ready():
                table = season.driver_standings()
    """

    def __init__(
        self,
        client: OpenF1Client,
        season: int,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        name_overrides: Mapping[int, str] = DRIVER_NAME_OVERRIDES,
        reconciler: ResultReconciler | None = None,
        engine: StandingsEngine | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._season = season
        self._refresh_interval = refresh_interval
        self._name_overrides = name_overrides
        self._catalog = SessionCatalog(client)
        self._reconciler = reconciler or ResultReconciler(client)
        self._engine = engine or StandingsEngine()
        self._now = now

        self._snapshot = Snapshot()
        self._initialized = False
        self._pending: asyncio.Task[None] | None = None
        self._refreshing = False
        self._refresh_task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SeasonAggregator:
        return cls(
            OpenF1Client.from_settings(settings),
            settings.season,
            refresh_interval=settings.refresh_interval,
        )

    async def __aenter__(self) -> SeasonAggregator:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop the periodic refresh and close the HTTP connection."""
        await self.stop()
        await self._client.close()

    # ── Lifecycle ──────────────────────────────────────────────

    async def initialize(self) -> None:
        """Load the season once and start the periodic refresh.

        Concurrent callers share the same in-flight load. Never raises;
        check ``is_ready()`` afterwards.
        """
        if self._initialized:
            logger.info("Season %d already initialized", self._season)
            return
        if self._pending is None:
            self._pending = asyncio.create_task(self._initial_load())
        await asyncio.shield(self._pending)

    async def _initial_load(self) -> None:
        try:
            await self.refresh()
            self._initialized = True
            self.start()
        finally:
            self._pending = None

    def start(self) -> None:
        """Schedule the periodic refresh task if it is not already running."""
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self._refresh_loop())

    async def stop(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self._refresh_interval)
            if self._refreshing:
                logger.info("Refresh still running, skipping scheduled tick")
                continue
            logger.info("Scheduled refresh of season %d", self._season)
            try:
                await self.refresh()
            except Exception:
                logger.exception("Scheduled refresh of season %d crashed", self._season)

    async def refresh(self) -> bool:
        """Run one aggregation pass and publish its snapshot.

        Returns False when a pass was already running or the pass failed;
        the previously published snapshot stays in place in both cases.
        """
        if self._refreshing:
            logger.info("Refresh already in progress")
            return False

        self._refreshing = True
        try:
            snapshot = await self._build_snapshot()
        except SeasonDataError as exc:
            logger.error("Season %d load failed, keeping previous snapshot: %s", self._season, exc)
            return False
        except Exception:
            logger.exception("Season %d pass crashed, keeping previous snapshot", self._season)
            return False
        finally:
            self._refreshing = False

        self._snapshot = snapshot
        logger.info(
            "Season %d updated: %d results, %d drivers",
            self._season, len(snapshot.results), len(snapshot.competitors),
        )
        if snapshot.has_preliminary:
            logger.warning("Season %d contains preliminary results", self._season)
        return True

    # ── Aggregation pass ───────────────────────────────────────

    async def _build_snapshot(self) -> Snapshot:
        logger.info("Loading season %d from OpenF1", self._season)
        try:
            sessions = await self._catalog.list_sessions(self._season)
        except OpenF1Error as exc:
            raise SeasonDataError(f"Session list for {self._season} unavailable: {exc}") from exc

        completed = self._catalog.list_completed(sessions, now=self._now())
        groups = self._catalog.partition(completed)
        discovery = {s.session_key: index for index, s in enumerate(completed)}

        worklist = sorted(
            [(s, SessionKind.RACE) for s in groups.races]
            + [(s, SessionKind.SPRINT) for s in groups.sprints],
            key=lambda item: (start_time(item[0]), discovery[item[0].session_key]),
        )
        logger.info(
            "Found %d races, %d sprints, %d qualifying sessions",
            len(groups.races), len(groups.sprints), len(groups.qualifying),
        )

        registry = EntityRegistry(self._client, self._name_overrides)
        qualifying = await self._load_qualifying(groups.qualifying, registry)

        results: list[ClassifiedResult] = []
        has_preliminary = False
        for session, kind in worklist:
            outcome = await self._load_session(session, kind, registry)
            if outcome is None:
                continue
            results.extend(outcome.results)
            if outcome.preliminary and outcome.results:
                has_preliminary = True

        return Snapshot(
            results=tuple(results),
            qualifying=tuple(qualifying),
            competitors=registry.competitors(),
            current_teams=registry.current_teams(),
            has_preliminary=has_preliminary,
            updated_at=self._now(),
        )

    async def _load_session(
        self, session: Session, kind: SessionKind, registry: EntityRegistry,
    ) -> SessionOutcome | None:
        """Reconcile one session, or None when its data could not be fetched."""
        try:
            roster = await registry.resolve_for_session(session)
            return await self._reconciler.reconcile(session, kind, roster)
        except OpenF1Error as exc:
            logger.error(
                "Skipping %s %s (session %s): %s",
                session.track, kind.value, session.session_key, exc,
            )
            return None

    async def _load_qualifying(
        self, sessions: list[Session], registry: EntityRegistry,
    ) -> list[QualifyingResult]:
        results: list[QualifyingResult] = []
        for session in sorted(sessions, key=start_time):
            try:
                roster = await registry.fetch_roster(session)
                results.extend(await self._reconciler.reconcile_qualifying(session, roster))
            except OpenF1Error as exc:
                logger.error(
                    "Skipping qualifying %s (session %s): %s",
                    session.track, session.session_key, exc,
                )
        logger.info("Loaded %d qualifying results", len(results))
        return results

    # ── Read API ───────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def get_snapshot(self) -> Snapshot:
        """The last committed snapshot; never a partially built one."""
        return self._snapshot

    def is_ready(self) -> bool:
        return self._initialized and not self._snapshot.is_empty

    def get_race_results(self) -> list[ClassifiedResult]:
        return list(self._snapshot.results)

    def get_qualifying_results(self) -> list[QualifyingResult]:
        return list(self._snapshot.qualifying)

    def get_driver_results(self, name: str) -> list[ClassifiedResult]:
        return driver_results(self._snapshot, name)

    def get_all_drivers(self) -> list[str]:
        return sorted(c.name for c in self._snapshot.competitors)

    def get_all_tracks(self) -> list[str]:
        return list(dict.fromkeys(r.track for r in self._snapshot.results))

    def get_current_team(self, driver_number: int) -> str | None:
        return self._snapshot.current_teams.get(driver_number)

    def driver_standings(self) -> list[DriverStanding]:
        return self._engine.driver_standings(self._snapshot)

    def team_standings(self) -> list[TeamStanding]:
        return self._engine.team_standings(self._snapshot)

    def driver_profile(self, name: str) -> DriverProfile | None:
        return self._engine.driver_profile(self._snapshot, name)
