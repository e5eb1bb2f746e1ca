"""Map-safe coordinates for tracks and simulated paths.

Leaflet-style maps draw a straight line between raw longitudes, so a segment
from 179.9 to -179.9 would cross the whole map. Longitudes are shifted by
multiples of 360 so every drawn step takes the short way round.
"""

from __future__ import annotations

from collections.abc import Sequence

from balloontrack.models.path import PathPoint
from balloontrack.models.track import Segment, Track


def _short_way(reference_lon: float, lon: float) -> float:
    """Shift ``lon`` by 360s until it is within 180 degrees of ``reference_lon``."""
    while lon - reference_lon > 180.0:
        lon -= 360.0
    while lon - reference_lon < -180.0:
        lon += 360.0
    return lon


def project_segment(segment: Segment) -> Segment:
    """Adjust the end longitude so the segment does not span the map."""
    lon = _short_way(segment.start.longitude, segment.end.longitude)
    if lon == segment.end.longitude:
        return segment
    return Segment(start=segment.start, end=segment.end.model_copy(update={"longitude": lon}))


def project_track(track: Track) -> list[Segment]:
    """Project each segment of ``track`` independently (segments are not chained)."""
    return [project_segment(segment) for segment in track.segments()]


def project_path(path: Sequence[PathPoint]) -> list[tuple[float, float]]:
    """Return ``(lat, lon)`` pairs with longitudes continued across the antimeridian.

    Each longitude is adjusted against the previous *adjusted* value, so a path
    that crosses the seam several times stays continuous.
    """
    if not path:
        return []

    projected = [(path[0].lat, path[0].lon)]
    prev_lon = path[0].lon
    for point in path[1:]:
        prev_lon = _short_way(prev_lon, point.lon)
        projected.append((point.lat, prev_lon))
    return projected


def hour_color(hour_ago: int, hours_total: int = 23) -> str:
    """RGBA colour from red (recent) to blue (oldest), fading with age."""
    ratio = min(1.0, max(0.0, hour_ago / hours_total))
    r = int(255 * (1 - ratio))
    b = int(255 * ratio)
    alpha = 0.3 + 0.5 * (1 - ratio)
    return f"rgba({r},40,{b},{alpha})"
