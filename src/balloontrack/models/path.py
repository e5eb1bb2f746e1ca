"""Predicted path model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PathPoint(BaseModel):
    """One point of a simulated path. Longitude is not wrapped."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
