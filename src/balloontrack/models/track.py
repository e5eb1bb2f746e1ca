"""Reconstructed track and segment models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from balloontrack.models.position import Position


class Segment(BaseModel):
    """One renderable edge between two adjacent track points."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @property
    def hour_ago(self) -> int | None:
        return self.start.hour_ago

    def to_latlngs(self) -> list[list[float]]:
        """Return ``[[lat, lon], [lat, lon]]`` for map polylines."""
        return [
            [self.start.latitude, self.start.longitude],
            [self.end.latitude, self.end.longitude],
        ]


class Track(BaseModel):
    """Positions believed to belong to one balloon, one per consecutive hour.

    ``track_id`` is the creation index within a single linking run.
    """

    model_config = ConfigDict(frozen=True)

    track_id: int
    positions: tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def first(self) -> Position:
        return self.positions[0]

    @property
    def last(self) -> Position:
        return self.positions[-1]

    def segments(self) -> list[Segment]:
        """Adjacent position pairs, oldest first."""
        return [
            Segment(start=a, end=b)
            for a, b in zip(self.positions, self.positions[1:])
        ]
