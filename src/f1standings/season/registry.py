"""Per-session driver rosters and latest-known team affiliations."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from f1standings.client import OpenF1Client
from f1standings.constants import DRIVER_NAME_OVERRIDES
from f1standings.models.driver import Driver
from f1standings.models.session import Session
from f1standings.season.types import Competitor

logger = logging.getLogger(__name__)


def normalize_driver_name(
    driver_number: int,
    full_name: str | None,
    overrides: Mapping[int, str] = DRIVER_NAME_OVERRIDES,
) -> str:
    """Apply the fixed name corrections, falling back to the upstream name."""
    return overrides.get(driver_number) or full_name or f"#{driver_number}"


class EntityRegistry:
    """Resolves each session's roster and tracks every driver's current team.

    Sessions must be resolved in chronological order: the current team map
    is last-write-wins.
    """

    def __init__(
        self,
        client: OpenF1Client,
        name_overrides: Mapping[int, str] = DRIVER_NAME_OVERRIDES,
    ) -> None:
        self._client = client
        self._overrides = name_overrides
        self._current_teams: dict[int, str] = {}
        self._competitors: dict[int, Competitor] = {}

    def _to_competitor(self, driver: Driver) -> Competitor | None:
        if driver.driver_number is None:
            return None
        return Competitor(
            number=driver.driver_number,
            name=normalize_driver_name(driver.driver_number, driver.full_name, self._overrides),
            team=driver.team_name or "",
            acronym=driver.name_acronym,
            country_code=driver.country_code,
        )

    async def fetch_roster(self, session: Session) -> dict[int, Competitor]:
        """Return the session's roster without touching the current-team map."""
        drivers = await self._client.drivers(session_key=session.session_key)
        roster: dict[int, Competitor] = {}
        for driver in drivers:
            competitor = self._to_competitor(driver)
            if competitor is not None:
                roster[competitor.number] = competitor
        return roster

    async def resolve_for_session(self, session: Session) -> dict[int, Competitor]:
        """Return the session's roster and record it as the latest affiliation."""
        roster = await self.fetch_roster(session)
        for number, competitor in roster.items():
            previous = self._current_teams.get(number)
            if previous is not None and previous != competitor.team:
                logger.info(
                    "Driver #%d moved from %s to %s in session %s",
                    number, previous, competitor.team, session.session_key,
                )
            self._current_teams[number] = competitor.team
            self._competitors[number] = competitor
        return roster

    def get_current_team(self, driver_number: int) -> str | None:
        return self._current_teams.get(driver_number)

    def competitors(self) -> tuple[Competitor, ...]:
        return tuple(self._competitors.values())

    def current_teams(self) -> Mapping[int, str]:
        """Read-only copy of the current team map, safe to publish."""
        return MappingProxyType(dict(self._current_teams))
