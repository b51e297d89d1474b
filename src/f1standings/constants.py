"""Scoring tables and upstream data corrections."""

from __future__ import annotations

DEFAULT_BASE_URL = "https://api.openf1.org/v1"

RACE_POINTS: dict[int, int] = {
    1: 25,
    2: 18,
    3: 15,
    4: 12,
    5: 10,
    6: 8,
    7: 6,
    8: 4,
    9: 2,
    10: 1,
}

SPRINT_POINTS: dict[int, int] = {
    1: 8,
    2: 7,
    3: 6,
    4: 5,
    5: 4,
    6: 3,
    7: 2,
    8: 1,
}

# OpenF1 ships a wrong full_name for some drivers
DRIVER_NAME_OVERRIDES: dict[int, str] = {
    12: "Andrea Kimi ANTONELLI",
}

RACE_SESSION_NAMES = {"Race"}
SPRINT_SESSION_NAMES = {"Sprint", "Sprint Race"}
QUALIFYING_SESSION_NAMES = {"Qualifying"}
