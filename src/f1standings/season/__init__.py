"""Season layer — session catalog, reconciliation, aggregation and standings."""

from .aggregator import SeasonAggregator
from .catalog import SessionCatalog, SessionGroups, session_kind
from .reconciler import ResultReconciler, SessionOutcome, classify
from .registry import EntityRegistry, normalize_driver_name
from .standings import StandingsEngine
from .types import (
    Classification,
    ClassifiedResult,
    Competitor,
    DriverProfile,
    DriverStanding,
    Outcome,
    QualifyingResult,
    SessionKind,
    Snapshot,
    TeamStanding,
    WeekendSummary,
)

__all__ = [
    "Classification",
    "ClassifiedResult",
    "Competitor",
    "DriverProfile",
    "DriverStanding",
    "EntityRegistry",
    "Outcome",
    "QualifyingResult",
    "ResultReconciler",
    "SeasonAggregator",
    "SessionCatalog",
    "SessionGroups",
    "SessionKind",
    "SessionOutcome",
    "Snapshot",
    "StandingsEngine",
    "TeamStanding",
    "WeekendSummary",
    "classify",
    "normalize_driver_name",
    "session_kind",
]
