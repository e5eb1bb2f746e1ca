"""Shared test fixtures and sample payloads."""

from __future__ import annotations

import logging

import pytest

from balloontrack.models import Position, Snapshot

SNAPSHOT_URL = "https://a.windbornesystems.com/treasure"
FORECAST_URL = "https://api.windy.com/api/point-forecast/v2"

SAMPLE_HOUR_BODY = [
    [10.0, 20.0, 12.5],
    [-33.9, 151.2, 18.1],
    [64.1, -21.9, 3.0],
]

SAMPLE_FORECAST = {
    "ts": [1700000000000, 1700003600000, 1700007200000],
    "units": {"wind_u-surface": "m*s-1", "wind_v-surface": "m*s-1"},
    "wind_u-surface": [3.0, 0.0, -4.0],
    "wind_v-surface": [4.0, -10.0, 0.0],
    "pressure-surface": [101325.4, 101300.6, 101280.0],
    "rh-surface": [55.04, 60.26, 70.0],
}


def make_snapshot(hour_ago: int, *coords: tuple[float, float]) -> Snapshot:
    """Snapshot with one position per ``(lat, lon)`` pair."""
    return Snapshot(
        hour_ago=hour_ago,
        positions=tuple(Position(latitude=lat, longitude=lon, altitude_km=15.0) for lat, lon in coords),
    )


@pytest.fixture(autouse=True)
def _isolated_call_log(tmp_path, monkeypatch):
    """Send the call log to tmp_path instead of ./logs."""
    import balloontrack._logging as mod

    named_logger = logging.getLogger("balloontrack.api")
    named_logger.handlers.clear()

    monkeypatch.setenv(mod.LOG_DIR_ENV, str(tmp_path))
    monkeypatch.setattr(mod, "_logger", None)

    yield tmp_path

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
