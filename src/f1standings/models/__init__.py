"""OpenF1 data models used by the standings service."""

from f1standings.models.driver import Driver
from f1standings.models.position import Position
from f1standings.models.session import Session
from f1standings.models.session_result import SessionResult

__all__ = [
    "Driver",
    "Position",
    "Session",
    "SessionResult",
]
