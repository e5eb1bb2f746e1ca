"""Balloon position and hourly snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Position(BaseModel):
    """A single observed balloon position.

    ``hour_ago`` belongs to the snapshot the position was read from; raw
    source records carry no hour and are tagged when linked.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)
    altitude_km: float = Field(default=0.0, allow_inf_nan=False)
    hour_ago: int | None = None


class Snapshot(BaseModel):
    """All positions reported for one hour."""

    model_config = ConfigDict(frozen=True)

    hour_ago: int
    positions: tuple[Position, ...] = ()

    @field_validator("positions", mode="before")
    @classmethod
    def _missing_positions_are_empty(cls, value: object) -> object:
        return () if value is None else value
