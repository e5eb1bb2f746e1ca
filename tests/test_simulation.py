"""Tests for wind-driven path simulation."""

from __future__ import annotations

import logging
import math

import pytest

from balloontrack.config import SimulationConfig
from balloontrack.models import ForecastSample, PathPoint, Position, Wind
from balloontrack.simulation import simulate_path, smooth_direction

STEP_KM_AT_10_MPS = 6.0  # 10 m/s for 600 s


def _sample(speed: float, direction: float, i: int = 0) -> ForecastSample:
    return ForecastSample(
        timestamp_ms=1_700_000_000_000 + i * 3_600_000,
        wind=Wind(speed=speed, direction=direction),
    )


class TestSmoothDirection:
    def test_moves_fraction_of_difference(self) -> None:
        assert smooth_direction(0, 90) == pytest.approx(27.0)

    def test_takes_short_way_through_north(self) -> None:
        assert smooth_direction(350, 10) == pytest.approx(356.0)
        assert smooth_direction(10, 350) == pytest.approx(4.0)

    def test_same_direction_is_stable(self) -> None:
        assert smooth_direction(123.0, 123.0) == pytest.approx(123.0)

    def test_full_weight_jumps_to_new_direction(self) -> None:
        assert smooth_direction(40, 200, alpha=1.0) == pytest.approx(200.0)

    def test_result_in_range(self) -> None:
        for prev in range(0, 360, 30):
            for new in range(0, 360, 45):
                assert 0 <= smooth_direction(prev, new) < 360


class TestSimulatePath:
    def test_empty_forecast_returns_start(self) -> None:
        start = PathPoint(lat=12.5, lon=-45.0)
        assert simulate_path(start, []) == [start]

    @pytest.mark.parametrize("n", [1, 2, 7, 24])
    def test_length_is_forecast_plus_one(self, n: int) -> None:
        forecast = [_sample(5.0, 45.0 * i, i) for i in range(n)]
        assert len(simulate_path(PathPoint(lat=0, lon=0), forecast)) == n + 1

    def test_first_point_is_start(self) -> None:
        start = PathPoint(lat=3.0, lon=4.0)
        assert simulate_path(start, [_sample(10, 0)])[0] == start

    def test_accepts_position_start(self) -> None:
        path = simulate_path(Position(latitude=3.0, longitude=4.0), [])
        assert path == [PathPoint(lat=3.0, lon=4.0)]

    def test_direction_zero_moves_along_latitude(self) -> None:
        path = simulate_path(PathPoint(lat=0, lon=0), [_sample(10, 0)])
        assert path[1].lat == pytest.approx(STEP_KM_AT_10_MPS / 111)
        assert path[1].lon == pytest.approx(0.0, abs=1e-12)

    def test_longitude_step_corrected_for_latitude(self) -> None:
        path = simulate_path(PathPoint(lat=60, lon=0), [_sample(10, 90)])
        assert path[1].lon == pytest.approx(STEP_KM_AT_10_MPS / (111 * 0.5))
        assert path[1].lat == pytest.approx(60.0)

    def test_first_sample_seeds_smoothing(self) -> None:
        # the first step uses the first direction unsmoothed, the second is pulled 30% towards 90
        path = simulate_path(PathPoint(lat=0, lon=0), [_sample(10, 0, 0), _sample(10, 90, 1)])
        dlat = path[2].lat - path[1].lat
        dlon = (path[2].lon - path[1].lon) * math.cos(math.radians(path[1].lat))
        assert math.degrees(math.atan2(dlon, dlat)) == pytest.approx(27.0, abs=1e-6)

    def test_zero_wind_stays_put(self) -> None:
        path = simulate_path(PathPoint(lat=5, lon=5), [_sample(0, 180, i) for i in range(3)])
        assert all(p == PathPoint(lat=5, lon=5) for p in path)

    def test_component_wind(self) -> None:
        # u=10 gives a direction of 270 degrees, so the point moves west
        sample = ForecastSample(timestamp_ms=0, wind=Wind(u=10.0, v=0.0))
        path = simulate_path(PathPoint(lat=0, lon=0), [sample])
        assert path[1].lon == pytest.approx(-STEP_KM_AT_10_MPS / 111)

    def test_timestep_scales_distance(self) -> None:
        config = SimulationConfig(timestep_seconds=1200)
        path = simulate_path(PathPoint(lat=0, lon=0), [_sample(10, 0)], config)
        assert path[1].lat == pytest.approx(2 * STEP_KM_AT_10_MPS / 111)

    def test_km_per_degree_is_configurable(self) -> None:
        config = SimulationConfig(km_per_degree_lat=100.0)
        path = simulate_path(PathPoint(lat=0, lon=0), [_sample(10, 0)], config)
        assert path[1].lat == pytest.approx(STEP_KM_AT_10_MPS / 100)

    def test_longitude_is_not_wrapped(self) -> None:
        forecast = [_sample(50, 90, i) for i in range(5)]
        path = simulate_path(PathPoint(lat=0, lon=179.9), forecast)
        assert path[-1].lon > 180

    def test_pole_is_clamped_and_logged(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="balloontrack.simulation"):
            path = simulate_path(PathPoint(lat=90, lon=0), [_sample(10, 90)])
        assert len(path) == 2
        assert math.isfinite(path[1].lon)
        assert "pole" in caplog.text
