"""Wind-driven path prediction.

The recurrence is illustrative rather than physical: each forecast sample
moves the balloon for one fixed timestep along an exponentially smoothed wind
direction.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from balloontrack.config import SimulationConfig
from balloontrack.models.forecast import ForecastSample
from balloontrack.models.path import PathPoint
from balloontrack.models.position import Position

logger = logging.getLogger(__name__)


def smooth_direction(prev_dir: float, new_dir: float, alpha: float = 0.3) -> float:
    """Move ``prev_dir`` towards ``new_dir`` by ``alpha`` of the shortest angular difference."""
    delta = ((new_dir - prev_dir + 540.0) % 360.0) - 180.0
    return (prev_dir + alpha * delta + 360.0) % 360.0


def _as_path_point(start: PathPoint | Position) -> PathPoint:
    if isinstance(start, Position):
        return PathPoint(lat=start.latitude, lon=start.longitude)
    return start


def simulate_path(
    start: PathPoint | Position,
    forecast: Sequence[ForecastSample],
    config: SimulationConfig | None = None,
) -> list[PathPoint]:
    """Integrate one timestep of wind displacement per forecast sample.

    Returns ``len(forecast) + 1`` points; the first is ``start``. Longitudes
    are left unwrapped, use ``project_path`` before drawing.
    """
    config = config or SimulationConfig()
    path = [_as_path_point(start)]
    prev_dir = forecast[0].wind.direction_deg if forecast else 0.0
    clamped_steps = 0

    for sample in forecast:
        last = path[-1]
        direction = smooth_direction(prev_dir, sample.wind.direction_deg, config.ema_alpha)
        prev_dir = direction

        distance_km = sample.wind.speed_mps * 3.6 * config.timestep_seconds / 3600.0
        direction_rad = math.radians(direction)

        # cos(lat) vanishes at the poles; keep its sign but bound its magnitude
        cos_lat = math.cos(math.radians(last.lat))
        if abs(cos_lat) < config.min_cos_latitude:
            cos_lat = math.copysign(config.min_cos_latitude, cos_lat)
            clamped_steps += 1

        delta_lat = distance_km * math.cos(direction_rad) / config.km_per_degree_lat
        delta_lon = distance_km * math.sin(direction_rad) / (config.km_per_degree_lat * cos_lat)
        path.append(PathPoint(lat=last.lat + delta_lat, lon=last.lon + delta_lon))

    if clamped_steps:
        logger.warning(
            "Clamped longitude correction near the pole in %d of %d steps",
            clamped_steps, len(forecast),
        )
    return path
