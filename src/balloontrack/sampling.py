"""Per-hour point thinning for display and linking."""

from __future__ import annotations

import math
from collections.abc import Iterable

from balloontrack.models.position import Position, Snapshot


def sample_points_by_hour(snapshots: Iterable[Snapshot], max_points: int = 50) -> list[Snapshot]:
    """Keep roughly ``max_points`` evenly spaced positions per hour."""
    sampled = []
    for snapshot in snapshots:
        step = max(1, len(snapshot.positions) // max_points)
        sampled.append(Snapshot(hour_ago=snapshot.hour_ago, positions=snapshot.positions[::step]))
    return sampled


def flatten_points(
    snapshots: Iterable[Snapshot],
    max_points_per_hour: int | None = None,
) -> list[Position]:
    """All positions tagged with their hour, optionally capped per hour."""
    points: list[Position] = []
    for snapshot in snapshots:
        tagged = [p.model_copy(update={"hour_ago": snapshot.hour_ago}) for p in snapshot.positions]
        if max_points_per_hour and len(tagged) > max_points_per_hour:
            tagged = tagged[:: math.ceil(len(tagged) / max_points_per_hour)]
        points.extend(tagged)
    return points
