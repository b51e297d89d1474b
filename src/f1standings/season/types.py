"""Domain types for the season aggregation and standings layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping


class SessionKind(str, Enum):
    RACE = "Race"
    SPRINT = "Sprint"
    QUALIFYING = "Qualifying"


class Outcome(str, Enum):
    """Resolved finishing status of a driver in a session."""

    FINISHED = "FINISHED"
    DNF = "DNF"
    DNS = "DNS"
    DSQ = "DSQ"
    NOT_CLASSIFIED = "NC"


@dataclass(frozen=True)
class Classification:
    outcome: Outcome
    position: int | None = None

    def __post_init__(self) -> None:
        if self.outcome is Outcome.FINISHED:
            if self.position is None or self.position < 1:
                raise ValueError("A finished classification needs a positive position")
        elif self.position is not None:
            raise ValueError(f"{self.outcome.value} cannot carry a position")

    @classmethod
    def finished(cls, position: int) -> Classification:
        return cls(Outcome.FINISHED, position)

    @property
    def is_classified(self) -> bool:
        return self.outcome is Outcome.FINISHED

    def finished_in(self, *positions: int) -> bool:
        """True when the driver finished in one of ``positions``."""
        return self.outcome is Outcome.FINISHED and self.position in positions

    @property
    def label(self) -> str:
        if self.outcome is Outcome.FINISHED:
            return f"P{self.position}"
        return self.outcome.value


@dataclass(frozen=True)
class Competitor:
    """A driver as seen in one session's roster."""

    number: int
    name: str
    team: str
    acronym: str | None = None
    country_code: str | None = None


@dataclass(frozen=True)
class ClassifiedResult:
    """One driver's reconciled result in a race or sprint session."""

    session_key: int
    kind: SessionKind
    track: str
    date: datetime
    driver_number: int
    driver: str
    team: str  # team for this session, never the driver's current team
    classification: Classification
    points: float = 0.0
    grid_position: int | None = None
    laps: int = 0
    gap: str = ""
    preliminary: bool = False

    @property
    def is_sprint(self) -> bool:
        return self.kind is SessionKind.SPRINT


@dataclass(frozen=True)
class QualifyingResult:
    session_key: int
    track: str
    date: datetime
    driver_number: int
    driver: str
    team: str
    position: int
    laps: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Immutable result set produced by one aggregation pass."""

    results: tuple[ClassifiedResult, ...] = ()
    qualifying: tuple[QualifyingResult, ...] = ()
    competitors: tuple[Competitor, ...] = ()
    current_teams: Mapping[int, str] = field(default_factory=dict)
    has_preliminary: bool = False
    updated_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return not self.results


@dataclass
class DriverStanding:
    position: int
    driver: str
    driver_number: int
    team: str
    points: float = 0.0
    wins: int = 0
    podiums: int = 0
    pole_positions: int = 0
    dnfs: int = 0


@dataclass
class TeamStanding:
    position: int
    team: str
    points: float = 0.0
    wins: int = 0
    podiums: int = 0


@dataclass(frozen=True)
class WeekendSummary:
    track: str
    date: datetime
    results: tuple[ClassifiedResult, ...]


@dataclass(frozen=True)
class DriverProfile:
    driver: str
    driver_number: int
    team: str
    championship_position: int
    points: float
    wins: int
    podiums: int
    pole_positions: int
    dnfs: int
    finish_rate: float
    avg_position: float | None
    recent_weekends: tuple[WeekendSummary, ...]
