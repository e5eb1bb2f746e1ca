"""Tunable thresholds and constants for linking, simulation and sampling."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from balloontrack.exceptions import BalloonTrackConfigError

ENV_PREFIX = "BALLOONTRACK_"

T = TypeVar("T", bound=BaseModel)


class LinkingConfig(BaseModel):
    """Validity thresholds for hour-to-hour track links."""

    model_config = ConfigDict(frozen=True)

    dist_threshold_km: float = Field(default=500.0, gt=0)
    max_speed_ratio: float = Field(default=3.0, ge=1.0)
    max_turn_angle_deg: float = Field(default=90.0, ge=0, le=180)
    # tails closer than this are treated as stationary noise
    min_step_km: float = Field(default=1.0, ge=0)


class SimulationConfig(BaseModel):
    """Constants for the wind-driven path recurrence."""

    model_config = ConfigDict(frozen=True)

    ema_alpha: float = Field(default=0.3, gt=0, le=1)
    timestep_seconds: float = Field(default=600.0, gt=0)
    km_per_degree_lat: float = Field(default=111.0, gt=0)
    min_cos_latitude: float = Field(default=1e-6, gt=0, lt=1)


class SamplingConfig(BaseModel):
    """Point thinning and colour scale settings."""

    model_config = ConfigDict(frozen=True)

    max_points_per_hour: int = Field(default=50, gt=0)
    hours_total: int = Field(default=23, gt=0)


def config_from_env(
    model: type[T],
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
) -> T:
    """Build a config model from ``PREFIX_FIELD_NAME`` environment variables.

    Variables that are not set keep the model default.

    Usage:
        linking = config_from_env(LinkingConfig)
        # BALLOONTRACK_DIST_THRESHOLD_KM=250 -> linking.dist_threshold_km == 250.0
    """
    env = os.environ if environ is None else environ
    values = {
        name: env[f"{prefix}{name.upper()}"]
        for name in model.model_fields
        if f"{prefix}{name.upper()}" in env
    }
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise BalloonTrackConfigError(
            f"Invalid {model.__name__} settings in environment: {exc}"
        ) from exc
