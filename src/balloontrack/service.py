"""Tracking service: wires data sources to the linking and simulation core."""

from __future__ import annotations

from balloontrack._logging import log_service_call
from balloontrack.config import LinkingConfig, SamplingConfig, SimulationConfig
from balloontrack.linking import LinkStrategy, link_tracks
from balloontrack.models.path import PathPoint
from balloontrack.models.position import Snapshot
from balloontrack.models.track import Segment, Track
from balloontrack.projection import hour_color, project_path, project_track
from balloontrack.sampling import sample_points_by_hour
from balloontrack.simulation import simulate_path
from balloontrack.sources import ForecastSource, SnapshotSource


class TrackingService:
    """Reconstructs balloon tracks and predicts paths from injected sources."""

    def __init__(
        self,
        snapshot_source: SnapshotSource,
        forecast_source: ForecastSource,
        linking: LinkingConfig | None = None,
        simulation: SimulationConfig | None = None,
        sampling: SamplingConfig | None = None,
        strategy: LinkStrategy | None = None,
    ) -> None:
        self._snapshots = snapshot_source
        self._forecasts = forecast_source
        self._linking = linking or LinkingConfig()
        self._simulation = simulation or SimulationConfig()
        self._sampling = sampling or SamplingConfig()
        self._strategy = strategy

    @log_service_call
    def load_snapshots(self) -> list[Snapshot]:
        """Fetch snapshots and thin each hour to the configured point budget."""
        snapshots = self._snapshots.fetch_snapshots()
        return sample_points_by_hour(snapshots, self._sampling.max_points_per_hour)

    @log_service_call
    def load_tracks(self, snapshots: list[Snapshot] | None = None) -> list[Track]:
        """Link snapshots into tracks, oldest hour first."""
        if snapshots is None:
            snapshots = self.load_snapshots()
        chronological = sorted(snapshots, key=lambda s: s.hour_ago, reverse=True)
        return link_tracks(chronological, self._linking, self._strategy)

    @log_service_call
    def track_segments(self, tracks: list[Track]) -> list[Segment]:
        """Map-safe segments for every track."""
        return [segment for track in tracks for segment in project_track(track)]

    def segment_color(self, segment: Segment) -> str:
        """Age colour for a segment on the configured hour scale."""
        return hour_color(segment.hour_ago or 0, self._sampling.hours_total)

    @log_service_call
    def predict_path(self, lat: float, lon: float) -> list[PathPoint]:
        """Simulate where a balloon at ``(lat, lon)`` drifts under the local forecast."""
        forecast = self._forecasts.forecast(lat, lon)
        return simulate_path(PathPoint(lat=lat, lon=lon), forecast, self._simulation)

    @log_service_call
    def predicted_polyline(self, lat: float, lon: float) -> list[tuple[float, float]]:
        """Predicted path as continuous ``(lat, lon)`` pairs for drawing."""
        return project_path(self.predict_path(lat, lon))
