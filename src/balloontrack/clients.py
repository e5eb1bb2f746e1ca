"""HTTP clients for balloon snapshots and point wind forecasts."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from balloontrack._cache import TTLCache
from balloontrack._http import DEFAULT_TIMEOUT, AsyncTransport, SyncTransport
from balloontrack._logging import log_api_call, log_async_api_call
from balloontrack.exceptions import (
    BalloonTrackConfigError,
    BalloonTrackError,
    BalloonTrackValidationError,
)
from balloontrack.models.forecast import ForecastSample
from balloontrack.models.position import Position, Snapshot
from balloontrack.sources import ForecastSource, SnapshotSource

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_URL = "https://a.windbornesystems.com/treasure"
DEFAULT_HOURS = 24

DEFAULT_FORECAST_URL = "https://api.windy.com"
FORECAST_ENDPOINT = "/api/point-forecast/v2"
DEFAULT_MODEL = "gfs"
DEFAULT_LEVELS = ("surface",)
DEFAULT_PARAMETERS = ("wind", "pressure", "rh")
DEFAULT_CACHE_TTL = 30 * 60.0
API_KEY_ENV = "WINDY_API_KEY"

T = TypeVar("T")


def _validate_list(model_type: type[T], data: list[dict[str, Any]]) -> list[T]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise BalloonTrackValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


# ── Snapshots ──────────────────────────────────────────────────


def _normalize_position(record: Any) -> Position | None:
    """Parse a ``[latitude, longitude, altitude_km]`` record, or None if corrupted."""
    if not isinstance(record, (list, tuple)) or len(record) != 3:
        return None
    lat, lon, alt = record
    try:
        return Position(latitude=lat, longitude=lon, altitude_km=alt)
    except ValidationError:
        return None


def normalize_snapshot(hour: int, body: Any) -> Snapshot:
    """Build a snapshot from one hourly payload, dropping corrupted records."""
    if not isinstance(body, list):
        raise BalloonTrackValidationError(
            f"Hour {hour:02d}: expected a list of positions, got {type(body).__name__}"
        )
    positions = [p for p in map(_normalize_position, body) if p is not None]
    dropped = len(body) - len(positions)
    if dropped:
        logger.debug("Hour %02d: dropped %d corrupted records", hour, dropped)
    return Snapshot(hour_ago=hour, positions=tuple(positions))


def _hour_endpoint(hour: int) -> str:
    return f"/{hour:02d}.json"


class SnapshotClient(SnapshotSource):
    """Synchronous client for the hourly balloon position feed.

    Usage:
        with SnapshotClient() as client:
            snapshots = client.fetch_snapshots()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SNAPSHOT_URL,
        hours: int = DEFAULT_HOURS,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._hours = hours
        self._transport = SyncTransport(base_url=base_url, timeout=timeout)

    def __enter__(self) -> SnapshotClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    @log_api_call
    def fetch_hour(self, hour: int) -> Snapshot:
        """Fetch one hour. Raises ``BalloonTrackError`` if it cannot be read."""
        body = self._transport.get(_hour_endpoint(hour))
        return normalize_snapshot(hour, body)

    @log_api_call
    def fetch_snapshots(self) -> list[Snapshot]:
        """Fetch every hour, newest first; failed hours come back empty."""
        snapshots = []
        for hour in range(self._hours):
            try:
                snapshots.append(self.fetch_hour(hour))
            except BalloonTrackError as exc:
                logger.warning("Hour %02d unavailable, using empty snapshot: %s", hour, exc)
                snapshots.append(Snapshot(hour_ago=hour))
        return snapshots


class AsyncSnapshotClient:
    """Asynchronous client for the hourly balloon position feed.

    Hours are requested concurrently.

    Usage:
        async with AsyncSnapshotClient() as client:
            snapshots = await client.fetch_snapshots()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SNAPSHOT_URL,
        hours: int = DEFAULT_HOURS,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._hours = hours
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncSnapshotClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    @log_async_api_call
    async def fetch_hour(self, hour: int) -> Snapshot:
        """Fetch one hour. Raises ``BalloonTrackError`` if it cannot be read."""
        body = await self._transport.get(_hour_endpoint(hour))
        return normalize_snapshot(hour, body)

    async def _fetch_or_empty(self, hour: int) -> Snapshot:
        try:
            return await self.fetch_hour(hour)
        except BalloonTrackError as exc:
            logger.warning("Hour %02d unavailable, using empty snapshot: %s", hour, exc)
            return Snapshot(hour_ago=hour)

    @log_async_api_call
    async def fetch_snapshots(self) -> list[Snapshot]:
        """Fetch every hour concurrently, newest first; failed hours come back empty."""
        return list(await asyncio.gather(*(self._fetch_or_empty(h) for h in range(self._hours))))


# ── Forecasts ──────────────────────────────────────────────────


def forecast_cache_key(
    lat: float,
    lon: float,
    model: str,
    parameters: Sequence[str],
    levels: Sequence[str],
) -> str:
    """Cache key with coordinates rounded to roughly 1 km."""
    return (
        f"windy:{round(float(lat), 2)}:{round(float(lon), 2)}:{model}:"
        f"{','.join(sorted(parameters))}:{','.join(sorted(levels))}"
    )


def _round(value: float | None, ndigits: int | None = None) -> float | None:
    return None if value is None else round(value, ndigits)


def normalize_forecast(raw: Any, level: str = "surface") -> list[ForecastSample]:
    """Turn the parallel arrays of a point-forecast response into samples."""
    try:
        timestamps = raw["ts"]
        u = raw[f"wind_u-{level}"]
        v = raw[f"wind_v-{level}"]
    except (KeyError, TypeError) as exc:
        raise BalloonTrackValidationError(f"Forecast response is missing {exc}") from exc
    pressure = raw.get(f"pressure-{level}")
    humidity = raw.get(f"rh-{level}")

    try:
        rows = [
            {
                "timestamp_ms": ts,
                "wind": {"u": u[i], "v": v[i]},
                "pressure": _round(pressure[i]) if pressure else None,
                "humidity": _round(humidity[i], 1) if humidity else None,
            }
            for i, ts in enumerate(timestamps)
        ]
    except (IndexError, TypeError) as exc:
        raise BalloonTrackValidationError(f"Malformed forecast arrays: {exc}") from exc
    return _validate_list(ForecastSample, rows)


class _ForecastSettings:
    """Request settings and response cache shared by the forecast clients."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        levels: Sequence[str],
        parameters: Sequence[str],
        cache: TTLCache | None,
        cache_ttl: float,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._levels = tuple(levels)
        self._parameters = tuple(parameters)
        self._cache = cache if cache is not None else TTLCache(cache_ttl)

    def _resolve_api_key(self) -> str:
        key = self._api_key or os.environ.get(API_KEY_ENV)
        if not key:
            raise BalloonTrackConfigError(
                f"No forecast API key: pass api_key or set {API_KEY_ENV}"
            )
        return key

    def _cache_key(self, lat: float, lon: float) -> str:
        return forecast_cache_key(lat, lon, self._model, self._parameters, self._levels)

    def _payload(self, lat: float, lon: float) -> dict[str, Any]:
        return {
            "lat": lat,
            "lon": lon,
            "model": self._model,
            "parameters": list(self._parameters),
            "levels": list(self._levels),
            "key": self._resolve_api_key(),
        }

    def _cached(self, lat: float, lon: float) -> list[ForecastSample] | None:
        key = self._cache_key(lat, lon)
        cached = self._cache.get(key)
        if cached is None:
            logger.info("Forecast cache miss for %s", key)
            return None
        logger.info("Forecast cache hit for %s", key)
        return list(cached)

    def _store(self, lat: float, lon: float, samples: list[ForecastSample]) -> None:
        self._cache.set(self._cache_key(lat, lon), tuple(samples))


class ForecastClient(_ForecastSettings, ForecastSource):
    """Synchronous point-forecast client with a response cache.

    Usage:
        with ForecastClient(api_key="...") as client:
            samples = client.forecast(lat=52.1, lon=-113.4)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_FORECAST_URL,
        model: str = DEFAULT_MODEL,
        levels: Sequence[str] = DEFAULT_LEVELS,
        parameters: Sequence[str] = DEFAULT_PARAMETERS,
        cache: TTLCache | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(api_key, model, levels, parameters, cache, cache_ttl)
        self._transport = SyncTransport(base_url=base_url, timeout=timeout)

    def __enter__(self) -> ForecastClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    @log_api_call
    def forecast(self, lat: float, lon: float) -> list[ForecastSample]:
        """Time-ordered forecast samples for ``(lat, lon)``."""
        cached = self._cached(lat, lon)
        if cached is not None:
            return cached
        raw = self._transport.post_json(FORECAST_ENDPOINT, self._payload(lat, lon))
        samples = normalize_forecast(raw, level=self._levels[0])
        self._store(lat, lon, samples)
        return samples


class AsyncForecastClient(_ForecastSettings):
    """Asynchronous point-forecast client with a response cache.

    Usage:
        async with AsyncForecastClient(api_key="...") as client:
            samples = await client.forecast(lat=52.1, lon=-113.4)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_FORECAST_URL,
        model: str = DEFAULT_MODEL,
        levels: Sequence[str] = DEFAULT_LEVELS,
        parameters: Sequence[str] = DEFAULT_PARAMETERS,
        cache: TTLCache | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(api_key, model, levels, parameters, cache, cache_ttl)
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncForecastClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    @log_async_api_call
    async def forecast(self, lat: float, lon: float) -> list[ForecastSample]:
        """Time-ordered forecast samples for ``(lat, lon)``."""
        cached = self._cached(lat, lon)
        if cached is not None:
            return cached
        raw = await self._transport.post_json(FORECAST_ENDPOINT, self._payload(lat, lon))
        samples = normalize_forecast(raw, level=self._levels[0])
        self._store(lat, lon, samples)
        return samples
