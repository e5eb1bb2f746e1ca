"""Track reconstruction from identity-free hourly snapshots.

Snapshots are processed in the order given. A track can only grow by a
position exactly one hour newer than its tail, so callers pass snapshots
oldest first (highest ``hour_ago`` first) to get multi-hour tracks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from balloontrack.config import LinkingConfig
from balloontrack.exceptions import DegenerateVectorError
from balloontrack.geo import angle_between_deg, direction_vector, great_circle_distance_km
from balloontrack.models.position import Position, Snapshot
from balloontrack.models.track import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkCandidate:
    """A permissible link from a track tail to a position of the current hour."""

    track_index: int
    position_index: int
    distance_km: float


class LinkStrategy(ABC):
    """Chooses which candidate links are applied for one hour."""

    @abstractmethod
    def assign(self, candidates: Sequence[LinkCandidate]) -> list[LinkCandidate]:
        """Return the accepted links.

        ``candidates`` arrive sorted by ascending distance. The result must use
        each track index and each position index at most once.
        """


class GreedyNearestStrategy(LinkStrategy):
    """Closest-first assignment where each track and position is claimed once.

    Deterministic for a given input order, but not a minimum-weight matching.
    """

    def assign(self, candidates: Sequence[LinkCandidate]) -> list[LinkCandidate]:
        claimed_tracks: set[int] = set()
        claimed_positions: set[int] = set()
        links: list[LinkCandidate] = []
        for candidate in candidates:
            if candidate.track_index in claimed_tracks:
                continue
            if candidate.position_index in claimed_positions:
                continue
            claimed_tracks.add(candidate.track_index)
            claimed_positions.add(candidate.position_index)
            links.append(candidate)
        return links


def _is_continuous(
    track: Sequence[Position],
    pos: Position,
    dist_km: float,
    config: LinkingConfig,
) -> bool:
    """Speed and heading checks against the last step of ``track``."""
    prev, last = track[-2], track[-1]
    step_km = great_circle_distance_km(prev, last)
    if step_km < config.min_step_km:
        return False

    speed_ratio = dist_km / step_km
    if speed_ratio > config.max_speed_ratio or speed_ratio < 1.0 / config.max_speed_ratio:
        return False

    try:
        turn = angle_between_deg(direction_vector(prev, last), direction_vector(last, pos))
    except DegenerateVectorError:
        return False
    return turn <= config.max_turn_angle_deg


def find_candidates(
    tracks: Sequence[Sequence[Position]],
    extendable: Iterable[int],
    positions: Sequence[Position],
    config: LinkingConfig,
) -> list[LinkCandidate]:
    """Return every valid (track, position) link, closest first.

    Ties keep track-major, position-minor order.
    """
    candidates: list[LinkCandidate] = []
    for track_index in extendable:
        track = tracks[track_index]
        for position_index, pos in enumerate(positions):
            dist_km = great_circle_distance_km(track[-1], pos)
            if dist_km >= config.dist_threshold_km:
                continue
            if len(track) >= 2 and not _is_continuous(track, pos, dist_km, config):
                continue
            candidates.append(LinkCandidate(track_index, position_index, dist_km))
    return sorted(candidates, key=lambda c: c.distance_km)


def link_tracks(
    snapshots: Iterable[Snapshot],
    config: LinkingConfig | None = None,
    strategy: LinkStrategy | None = None,
) -> list[Track]:
    """Link snapshot positions into tracks.

    Returns every track in creation order, including tracks that stopped
    growing early and single-point tracks.
    """
    config = config or LinkingConfig()
    strategy = strategy or GreedyNearestStrategy()
    tracks: list[list[Position]] = []

    for snapshot in snapshots:
        hour = snapshot.hour_ago
        positions = [p.model_copy(update={"hour_ago": hour}) for p in snapshot.positions]
        if not positions:
            logger.debug("Hour %d has no positions", hour)
            continue

        extendable = [
            i for i, track in enumerate(tracks)
            if track[-1].hour_ago is not None and track[-1].hour_ago - 1 == hour
        ]
        claimed: set[int] = set()
        if extendable:
            candidates = find_candidates(tracks, extendable, positions, config)
            for link in strategy.assign(candidates):
                tracks[link.track_index].append(positions[link.position_index])
                claimed.add(link.position_index)

        for position_index, pos in enumerate(positions):
            if position_index not in claimed:
                tracks.append([pos])

        logger.debug(
            "Hour %d: %d positions, %d extendable tracks, %d linked",
            hour, len(positions), len(extendable), len(claimed),
        )

    return [Track(track_id=i, positions=tuple(t)) for i, t in enumerate(tracks)]
