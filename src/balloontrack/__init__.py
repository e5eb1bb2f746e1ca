"""balloontrack: track reconstruction and wind-driven path prediction for balloon snapshots."""

from balloontrack.clients import (
    AsyncForecastClient,
    AsyncSnapshotClient,
    ForecastClient,
    SnapshotClient,
)
from balloontrack.config import LinkingConfig, SamplingConfig, SimulationConfig, config_from_env
from balloontrack.exceptions import (
    BalloonTrackAPIError,
    BalloonTrackConfigError,
    BalloonTrackConnectionError,
    BalloonTrackError,
    BalloonTrackTimeoutError,
    BalloonTrackValidationError,
    DegenerateVectorError,
)
from balloontrack.geo import angle_between_deg, great_circle_distance_km, wrapped_longitude_delta
from balloontrack.linking import GreedyNearestStrategy, LinkCandidate, LinkStrategy, link_tracks
from balloontrack.models import ForecastSample, PathPoint, Position, Segment, Snapshot, Track, Wind
from balloontrack.projection import hour_color, project_path, project_segment, project_track
from balloontrack.sampling import flatten_points, sample_points_by_hour
from balloontrack.service import TrackingService
from balloontrack.simulation import simulate_path, smooth_direction
from balloontrack.sources import ForecastSource, SnapshotSource

__all__ = [
    "AsyncForecastClient",
    "AsyncSnapshotClient",
    "BalloonTrackAPIError",
    "BalloonTrackConfigError",
    "BalloonTrackConnectionError",
    "BalloonTrackError",
    "BalloonTrackTimeoutError",
    "BalloonTrackValidationError",
    "DegenerateVectorError",
    "ForecastClient",
    "ForecastSample",
    "ForecastSource",
    "GreedyNearestStrategy",
    "LinkCandidate",
    "LinkStrategy",
    "LinkingConfig",
    "PathPoint",
    "Position",
    "SamplingConfig",
    "Segment",
    "SimulationConfig",
    "Snapshot",
    "SnapshotClient",
    "SnapshotSource",
    "Track",
    "TrackingService",
    "Wind",
    "angle_between_deg",
    "config_from_env",
    "flatten_points",
    "great_circle_distance_km",
    "hour_color",
    "link_tracks",
    "project_path",
    "project_segment",
    "project_track",
    "sample_points_by_hour",
    "simulate_path",
    "smooth_direction",
    "wrapped_longitude_delta",
]

__version__ = "0.1.0"
