"""Per-session result reconciliation.

A session's classification comes from ``/session_result`` when OpenF1 has
published it. Until then the final order is rebuilt from the last
``/position`` sample of every driver and points are taken from the local
scoring tables; those results are flagged as preliminary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from f1standings.client import OpenF1Client
from f1standings.constants import RACE_POINTS, SPRINT_POINTS
from f1standings.exceptions import MissingCompetitorRecord
from f1standings.models.position import Position
from f1standings.models.session import Session
from f1standings.models.session_result import SessionResult
from f1standings.season.catalog import start_time
from f1standings.season.types import (
    Classification,
    ClassifiedResult,
    Competitor,
    Outcome,
    QualifyingResult,
    SessionKind,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    results: list[ClassifiedResult]
    preliminary: bool


def _has_position(record: SessionResult | Position) -> bool:
    return record.position is not None and record.position > 0


def classify(record: SessionResult) -> Classification:
    """Map upstream flags to an outcome: DSQ > DNS > DNF > finished > NC."""
    if record.dsq:
        return Classification(Outcome.DSQ)
    if record.dns:
        return Classification(Outcome.DNS)
    if record.dnf:
        return Classification(Outcome.DNF)
    if _has_position(record):
        return Classification.finished(record.position)  # type: ignore[arg-type]
    return Classification(Outcome.NOT_CLASSIFIED)


def order_official(records: list[SessionResult]) -> list[SessionResult]:
    """Keep positioned or flagged records, positioned ones first by position.

    Unpositioned records keep their upstream order.
    """
    kept = [r for r in records if _has_position(r) or r.dnf or r.dns or r.dsq]
    return sorted(
        kept,
        key=lambda r: (0, r.position) if _has_position(r) else (1, 0),
    )


def final_positions(samples: list[Position]) -> list[Position]:
    """Return each driver's latest position sample, ordered by position."""
    latest: dict[int, Position] = {}
    for sample in samples:
        if sample.driver_number is None or sample.position is None:
            continue
        existing = latest.get(sample.driver_number)
        if existing is None or (
            sample.date is not None
            and (existing.date is None or sample.date > existing.date)
        ):
            latest[sample.driver_number] = sample
    return sorted(
        (p for p in latest.values() if _has_position(p)),
        key=lambda p: p.position,  # type: ignore[arg-type, return-value]
    )


def _format_gap(value: float | str | list[float | str | None] | None) -> str:
    if isinstance(value, list):
        value = next((v for v in reversed(value) if v is not None), None)
    return "" if value is None else str(value)


class ResultReconciler:
    """Turns one session's upstream records into classified results."""

    def __init__(
        self,
        client: OpenF1Client,
        race_points: Mapping[int, int] = RACE_POINTS,
        sprint_points: Mapping[int, int] = SPRINT_POINTS,
    ) -> None:
        self._client = client
        self._race_points = race_points
        self._sprint_points = sprint_points

    def points_for(self, position: int, kind: SessionKind) -> int:
        table = self._sprint_points if kind is SessionKind.SPRINT else self._race_points
        return table.get(position, 0)

    async def reconcile(
        self,
        session: Session,
        kind: SessionKind,
        roster: Mapping[int, Competitor],
    ) -> SessionOutcome:
        """Resolve the ordered results of a race or sprint session.

        Fetch errors propagate; the caller decides whether to skip the session.
        """
        official = await self._client.session_result(session_key=session.session_key)
        if official:
            return SessionOutcome(
                results=self._from_official(session, kind, official, roster),
                preliminary=False,
            )

        logger.warning(
            "No official result for %s %s (session %s), using position data",
            session.track, kind.value, session.session_key,
        )
        samples = await self._client.position(session_key=session.session_key)
        return SessionOutcome(
            results=self._from_positions(session, kind, samples, roster),
            preliminary=True,
        )

    def _lookup(
        self, session: Session, roster: Mapping[int, Competitor], driver_number: int | None,
    ) -> Competitor | None:
        competitor = roster.get(driver_number) if driver_number is not None else None
        if competitor is None:
            logger.warning("%s", MissingCompetitorRecord(session.session_key, driver_number))
        return competitor

    def _from_official(
        self,
        session: Session,
        kind: SessionKind,
        records: list[SessionResult],
        roster: Mapping[int, Competitor],
    ) -> list[ClassifiedResult]:
        results: list[ClassifiedResult] = []
        for record in order_official(records):
            competitor = self._lookup(session, roster, record.driver_number)
            if competitor is None:
                continue
            results.append(
                ClassifiedResult(
                    session_key=session.session_key,  # type: ignore[arg-type]
                    kind=kind,
                    track=session.track,
                    date=start_time(session),
                    driver_number=competitor.number,
                    driver=competitor.name,
                    team=competitor.team or record.team_name or "",
                    classification=classify(record),
                    # Taken as published, DSQ included
                    points=max(record.points or 0.0, 0.0),
                    grid_position=record.grid_position,
                    laps=record.number_of_laps or 0,
                    gap=_format_gap(record.gap_to_leader),
                )
            )
        return results

    def _from_positions(
        self,
        session: Session,
        kind: SessionKind,
        samples: list[Position],
        roster: Mapping[int, Competitor],
    ) -> list[ClassifiedResult]:
        results: list[ClassifiedResult] = []
        for sample in final_positions(samples):
            competitor = self._lookup(session, roster, sample.driver_number)
            if competitor is None:
                continue
            position: int = sample.position  # type: ignore[assignment]
            results.append(
                ClassifiedResult(
                    session_key=session.session_key,  # type: ignore[arg-type]
                    kind=kind,
                    track=session.track,
                    date=start_time(session),
                    driver_number=competitor.number,
                    driver=competitor.name,
                    team=competitor.team,
                    classification=Classification.finished(position),
                    points=self.points_for(position, kind),
                    preliminary=True,
                )
            )
        return results

    async def reconcile_qualifying(
        self, session: Session, roster: Mapping[int, Competitor],
    ) -> list[QualifyingResult]:
        """Return the positioned official qualifying order, or [] if unpublished."""
        records = await self._client.session_result(session_key=session.session_key)
        results: list[QualifyingResult] = []
        for record in sorted(
            (r for r in records if _has_position(r)),
            key=lambda r: r.position,  # type: ignore[arg-type, return-value]
        ):
            competitor = self._lookup(session, roster, record.driver_number)
            if competitor is None:
                continue
            results.append(
                QualifyingResult(
                    session_key=session.session_key,  # type: ignore[arg-type]
                    track=session.track,
                    date=start_time(session),
                    driver_number=competitor.number,
                    driver=competitor.name,
                    team=competitor.team,
                    position=record.position,  # type: ignore[arg-type]
                    laps=record.number_of_laps or 0,
                )
            )
        return results
