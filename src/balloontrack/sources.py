"""Abstract data sources consumed by the tracking service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from balloontrack.models.forecast import ForecastSample
from balloontrack.models.position import Snapshot


class SnapshotSource(ABC):
    """Provides hourly balloon snapshots, one per ``hour_ago``.

    An hour with no usable data is returned as an empty snapshot so the hour
    numbering is preserved.
    """

    @abstractmethod
    def fetch_snapshots(self) -> list[Snapshot]: ...


class ForecastSource(ABC):
    """Provides a time-ordered point forecast for one location."""

    @abstractmethod
    def forecast(self, lat: float, lon: float) -> list[ForecastSample]: ...
