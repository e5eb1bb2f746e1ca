"""balloontrack data models."""

from balloontrack.models.forecast import ForecastSample, Wind
from balloontrack.models.path import PathPoint
from balloontrack.models.position import Position, Snapshot
from balloontrack.models.track import Segment, Track

__all__ = [
    "ForecastSample",
    "PathPoint",
    "Position",
    "Segment",
    "Snapshot",
    "Track",
    "Wind",
]
