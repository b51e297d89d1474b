"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from f1standings._retry import RetryPolicy
from f1standings.client import OpenF1Client

BASE_URL = "https://api.openf1.org/v1"


SAMPLE_DRIVER = {
    "broadcast_name": "M VERSTAPPEN",
    "country_code": "NED",
    "driver_number": 1,
    "first_name": "Max",
    "full_name": "Max VERSTAPPEN",
    "last_name": "Verstappen",
    "meeting_key": 1219,
    "name_acronym": "VER",
    "session_key": 9161,
    "team_colour": "3671C6",
    "team_name": "Red Bull Racing",
}

SAMPLE_SESSION = {
    "circuit_key": 61,
    "circuit_short_name": "Bahrain",
    "country_name": "Bahrain",
    "date_end": "2023-03-05T17:02:48+00:00",
    "date_start": "2023-03-05T15:00:00+00:00",
    "location": "Sakhir",
    "meeting_key": 1219,
    "session_key": 9161,
    "session_name": "Race",
    "session_type": "Race",
    "year": 2023,
}

SAMPLE_RESULT = {
    "dnf": False,
    "dns": False,
    "dsq": False,
    "driver_number": 1,
    "duration": 5636.736,
    "gap_to_leader": 0,
    "grid_position": 1,
    "meeting_key": 1219,
    "number_of_laps": 57,
    "points": 25,
    "position": 1,
    "session_key": 9161,
    "team_name": "Red Bull Racing",
}

SAMPLE_POSITION = {
    "date": "2023-03-05T16:58:31.502000+00:00",
    "driver_number": 1,
    "meeting_key": 1219,
    "position": 1,
    "session_key": 9161,
}


def make_session(
    session_key: int,
    session_name: str = "Race",
    date_start: str = "2025-03-16T04:00:00+00:00",
    circuit: str = "Melbourne",
) -> dict[str, Any]:
    return {
        "circuit_short_name": circuit,
        "date_start": date_start,
        "location": circuit,
        "session_key": session_key,
        "session_name": session_name,
        "session_type": "Qualifying" if session_name == "Qualifying" else "Race",
        "year": 2025,
    }


def make_driver(driver_number: int, full_name: str, team_name: str) -> dict[str, Any]:
    return {
        "driver_number": driver_number,
        "full_name": full_name,
        "name_acronym": full_name[:3].upper(),
        "team_name": team_name,
    }


def make_result(
    driver_number: int,
    position: int | None,
    points: float = 0,
    **flags: Any,
) -> dict[str, Any]:
    return {
        "driver_number": driver_number,
        "position": position,
        "points": points,
        "number_of_laps": 57,
        **flags,
    }


def make_position(driver_number: int, position: int, date: str) -> dict[str, Any]:
    return {"driver_number": driver_number, "position": position, "date": date}


async def _no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def sleeps() -> list[float]:
    """Records every delay requested by the client instead of sleeping."""
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return _sleep


@pytest.fixture
def fast_client() -> OpenF1Client:
    """Client with no pacing delay and no backoff sleeps."""
    return OpenF1Client(
        retry=RetryPolicy(sleep=_no_sleep),
        request_delay=0,
        sleep=_no_sleep,
    )


@pytest.fixture(autouse=True)
def _api_log_to_tmp(tmp_path):
    """Redirect the API call log file into tmp_path for every test."""
    import f1standings.api_logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR
    old_file = mod._LOG_FILE

    named_logger = logging.getLogger("f1standings.api")
    named_logger.handlers.clear()

    mod._logger = None
    mod._LOG_DIR = str(tmp_path)
    mod._LOG_FILE = str(tmp_path / "api_calls.log")

    yield tmp_path

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger = old_logger
    mod._LOG_DIR = old_dir
    mod._LOG_FILE = old_file
