"""Wind forecast models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, model_validator


class Wind(BaseModel):
    """Wind at one forecast step, given as components or in polar form.

    ``u`` is the eastward and ``v`` the northward component in m/s.
    ``direction`` follows the meteorological convention (degrees, the
    direction the wind blows from).
    """

    model_config = ConfigDict(frozen=True)

    u: float | None = None
    v: float | None = None
    speed: float | None = None
    direction: float | None = None

    @model_validator(mode="after")
    def _require_one_form(self) -> Wind:
        has_polar = self.speed is not None and self.direction is not None
        has_components = self.u is not None and self.v is not None
        if not (has_polar or has_components):
            raise ValueError("wind needs either (u, v) or (speed, direction)")
        return self

    @property
    def speed_mps(self) -> float:
        if self.speed is not None and self.direction is not None:
            return self.speed
        return math.sqrt(self.u**2 + self.v**2)  # type: ignore[operator]

    @property
    def direction_deg(self) -> float:
        if self.speed is not None and self.direction is not None:
            return self.direction
        return (math.degrees(math.atan2(self.u, self.v)) + 180.0) % 360.0  # type: ignore[arg-type]


class ForecastSample(BaseModel):
    """Point forecast for one timestamp at a single location."""

    model_config = ConfigDict(frozen=True)

    timestamp_ms: int
    wind: Wind
    pressure: float | None = None
    humidity: float | None = None
