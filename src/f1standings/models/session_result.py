"""Session result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class SessionResult(BaseModel):
    """Official standing after a session, as published by ``/session_result``.

    The ``dnf``/``dns``/``dsq`` flags are often absent; absent means False.
    """

    model_config = ConfigDict(frozen=True)

    dnf: bool = False
    dns: bool = False
    dsq: bool = False
    driver_number: int | None = None
    duration: float | list[float | None] | None = None
    gap_to_leader: float | str | list[float | str | None] | None = None
    grid_position: int | None = None
    meeting_key: int | None = None
    number_of_laps: int | None = None
    points: float | None = None
    position: int | None = None
    session_key: int | None = None
    team_name: str | None = None

    @field_validator("dnf", "dns", "dsq", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value: object) -> object:
        return False if value is None else value
