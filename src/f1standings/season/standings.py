"""Driver and team standings computed from a committed snapshot."""

from __future__ import annotations

from typing import TypeVar

from f1standings.api_logging import log_service_call
from f1standings.season.types import (
    ClassifiedResult,
    DriverProfile,
    DriverStanding,
    Snapshot,
    TeamStanding,
    WeekendSummary,
)

PODIUM_POSITIONS = (1, 2, 3)
RECENT_WEEKENDS = 5

S = TypeVar("S", DriverStanding, TeamStanding)


def counts_as_win(result: ClassifiedResult) -> bool:
    return not result.is_sprint and result.classification.finished_in(1)


def counts_as_podium(result: ClassifiedResult) -> bool:
    return not result.is_sprint and result.classification.finished_in(*PODIUM_POSITIONS)


def counts_as_dnf(result: ClassifiedResult) -> bool:
    """DNF, DNS, DSQ and not-classified all count as a non-finish."""
    return not result.classification.is_classified


def _rank(standings: list[S]) -> list[S]:
    # Stable: equal points keep first-appearance order in the snapshot
    ranked = sorted(standings, key=lambda s: -s.points)
    for index, standing in enumerate(ranked):
        standing.position = index + 1
    return ranked


def driver_results(snapshot: Snapshot, name: str) -> list[ClassifiedResult]:
    """Results whose driver name contains ``name``, case-insensitively."""
    needle = name.lower()
    return [r for r in snapshot.results if needle in r.driver.lower()]


class StandingsEngine:
    """Pure standings computations; every call recomputes from the snapshot."""

    @log_service_call
    def driver_standings(self, snapshot: Snapshot) -> list[DriverStanding]:
        by_driver: dict[str, DriverStanding] = {}

        for result in snapshot.results:
            standing = by_driver.get(result.driver)
            if standing is None:
                standing = DriverStanding(
                    position=0,
                    driver=result.driver,
                    driver_number=result.driver_number,
                    team=snapshot.current_teams.get(result.driver_number, result.team),
                )
                by_driver[result.driver] = standing

            standing.points += result.points
            if counts_as_win(result):
                standing.wins += 1
            if counts_as_podium(result):
                standing.podiums += 1
            if counts_as_dnf(result):
                standing.dnfs += 1

        for quali in snapshot.qualifying:
            if quali.position == 1 and quali.driver in by_driver:
                by_driver[quali.driver].pole_positions += 1

        return _rank(list(by_driver.values()))

    @log_service_call
    def team_standings(self, snapshot: Snapshot) -> list[TeamStanding]:
        """Team totals from the team recorded on each session result.

        Points stay with the team a driver raced for in that session, not
        the driver's current team.
        """
        by_team: dict[str, TeamStanding] = {}

        for result in snapshot.results:
            standing = by_team.get(result.team)
            if standing is None:
                standing = TeamStanding(position=0, team=result.team)
                by_team[result.team] = standing

            standing.points += result.points
            if counts_as_win(result):
                standing.wins += 1
            if counts_as_podium(result):
                standing.podiums += 1

        return _rank(list(by_team.values()))

    @log_service_call
    def driver_profile(self, snapshot: Snapshot, name: str) -> DriverProfile | None:
        """Season summary for the first driver matching ``name``, or None."""
        matches = driver_results(snapshot, name)
        if not matches:
            return None

        driver = matches[0].driver
        results = [r for r in matches if r.driver == driver]
        number = results[0].driver_number

        standings = self.driver_standings(snapshot)
        standing = next(s for s in standings if s.driver == driver)

        classified = [
            r.classification.position for r in results
            if r.classification.position is not None
        ]
        finishes = sum(1 for r in results if not counts_as_dnf(r))

        return DriverProfile(
            driver=driver,
            driver_number=number,
            team=snapshot.current_teams.get(number, results[-1].team),
            championship_position=standing.position,
            points=standing.points,
            wins=standing.wins,
            podiums=standing.podiums,
            pole_positions=standing.pole_positions,
            dnfs=standing.dnfs,
            finish_rate=round(finishes / len(results) * 100, 1),
            avg_position=round(sum(classified) / len(classified), 1) if classified else None,
            recent_weekends=recent_weekends(results),
        )


def recent_weekends(
    results: list[ClassifiedResult], limit: int = RECENT_WEEKENDS,
) -> tuple[WeekendSummary, ...]:
    """Group results by track, newest weekend first, sessions in time order."""
    by_track: dict[str, list[ClassifiedResult]] = {}
    for result in results:
        by_track.setdefault(result.track, []).append(result)

    weekends = [
        WeekendSummary(
            track=track,
            date=min(r.date for r in group),
            results=tuple(sorted(group, key=lambda r: r.date)),
        )
        for track, group in by_track.items()
    ]
    weekends.sort(key=lambda w: w.date, reverse=True)
    return tuple(weekends[:limit])
