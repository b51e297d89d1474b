"""f1standings — Point-in-time F1 season standings built from the OpenF1 API."""

from f1standings._retry import RetryPolicy
from f1standings.client import OpenF1Client
from f1standings.config import Settings, get_settings
from f1standings.exceptions import (
    MissingCompetitorRecord,
    OpenF1APIError,
    OpenF1ConnectionError,
    OpenF1Error,
    OpenF1TimeoutError,
    OpenF1ValidationError,
    PermanentHTTPError,
    RateLimitedError,
    SeasonDataError,
    TransientNetworkError,
)
from f1standings.season import SeasonAggregator, StandingsEngine

__all__ = [
    "MissingCompetitorRecord",
    "OpenF1APIError",
    "OpenF1Client",
    "OpenF1ConnectionError",
    "OpenF1Error",
    "OpenF1TimeoutError",
    "OpenF1ValidationError",
    "PermanentHTTPError",
    "RateLimitedError",
    "RetryPolicy",
    "SeasonAggregator",
    "Settings",
    "SeasonDataError",
    "StandingsEngine",
    "TransientNetworkError",
    "get_settings",
]

__version__ = "0.1.0"
