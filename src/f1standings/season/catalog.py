"""Season session listing and filtering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from f1standings.client import OpenF1Client
from f1standings.constants import (
    QUALIFYING_SESSION_NAMES,
    RACE_SESSION_NAMES,
    SPRINT_SESSION_NAMES,
)
from f1standings.models.session import Session
from f1standings.season.types import SessionKind


@dataclass(frozen=True)
class SessionGroups:
    races: list[Session]
    sprints: list[Session]
    qualifying: list[Session]


def session_kind(session: Session) -> SessionKind | None:
    """Classify a session by name; practice and sprint qualifying are None."""
    name = session.session_name
    if name in RACE_SESSION_NAMES:
        return SessionKind.RACE
    if name in SPRINT_SESSION_NAMES:
        return SessionKind.SPRINT
    if name in QUALIFYING_SESSION_NAMES:
        return SessionKind.QUALIFYING
    return None


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def start_time(session: Session) -> datetime:
    """Timezone-aware start of a session; naive upstream times are UTC."""
    if session.date_start is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    return _aware(session.date_start)


class SessionCatalog:
    """Lists a season's sessions and picks the ones that already started."""

    def __init__(self, client: OpenF1Client) -> None:
        self._client = client

    async def list_sessions(self, year: int) -> list[Session]:
        return await self._client.sessions(year=year)

    @staticmethod
    def list_completed(sessions: list[Session], now: datetime | None = None) -> list[Session]:
        """Return sessions whose start time is strictly before ``now``."""
        now = _aware(now or datetime.now(timezone.utc))
        return [
            s for s in sessions
            if s.session_key is not None
            and s.date_start is not None
            and _aware(s.date_start) < now
        ]

    @staticmethod
    def partition(sessions: list[Session]) -> SessionGroups:
        races: list[Session] = []
        sprints: list[Session] = []
        qualifying: list[Session] = []
        for session in sessions:
            kind = session_kind(session)
            if kind is SessionKind.RACE:
                races.append(session)
            elif kind is SessionKind.SPRINT:
                sprints.append(session)
            elif kind is SessionKind.QUALIFYING:
                qualifying.append(session)
        return SessionGroups(races=races, sprints=sprints, qualifying=qualifying)
