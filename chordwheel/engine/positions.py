"""Chord position map for the circle of fifths.

Every chord in the diagram is identified by a ring (which concentric band)
and an index 0-11, counted clockwise from the 12 o'clock position:

- major chords in the outer ring
- minor chords in the middle ring
- diminished chords in the inner ring

Names are looked up with a linear search because compound entries such as
``"Gb/F#"`` answer to either spelling; the map is not a perfect inverse.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

from chordwheel.utils.geometry import (
    POSITIONS_PER_RING,
    circular_distance,
    index_angle,
    polar_to_cartesian,
)

logger = logging.getLogger(__name__)

DEFAULT_CENTER = (190.0, 190.0)

COMPOUND_SEPARATOR = "/"


class Ring(str, enum.Enum):
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"

    # Geometric aliases
    OUTER = "major"
    MIDDLE = "minor"
    INNER = "diminished"

    @property
    def rank(self) -> int:
        """0 for the outer ring, 2 for the inner ring."""
        return _RING_ORDER.index(self)


_RING_ORDER = (Ring.MAJOR, Ring.MINOR, Ring.DIMINISHED)


@dataclass(frozen=True)
class Position:
    """One angular sector of one ring."""

    ring: Ring
    index: int

    @property
    def id(self) -> str:
        return position_id(self.ring, self.index)

    @property
    def name(self) -> str:
        return chord_name_at(self.ring, self.index)


@dataclass(frozen=True)
class RingSegment:
    """A run of clockwise-contiguous indices within one ring."""

    ring: Ring
    indices: tuple[int, ...]

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def end(self) -> int:
        return self.indices[-1]


# Chord names in circle of fifths order, clockwise from the top.
CIRCLE_POSITIONS: dict[Ring, tuple[str, ...]] = {
    Ring.MAJOR: ("C", "G", "D", "A", "E", "B", "Gb/F#", "Db", "Ab", "Eb", "Bb", "F"),
    Ring.MINOR: ("Am", "Em", "Bm", "F#m", "C#m", "G#m", "Ebm/D#m", "Bbm", "Fm", "Cm", "Gm", "Dm"),
    Ring.DIMINISHED: ("B°", "F#°", "C#°", "G#°", "D#°", "A#°", "F°", "C°", "G°", "D°", "A°", "E°"),
}

# Radius used to place a chord label / point, per ring.
POINT_RADII: dict[Ring, float] = {
    Ring.MAJOR: 150.0,
    Ring.MINOR: 110.0,
    Ring.DIMINISHED: 70.0,
}

# (inner, outer) radial extent of each ring's sectors. Neighbouring rings
# share their border radius.
SECTOR_RADII: dict[Ring, tuple[float, float]] = {
    Ring.MAJOR: (130.0, 165.0),
    Ring.MINOR: (90.0, 130.0),
    Ring.DIMINISHED: (50.0, 90.0),
}


def coerce_ring(value: Ring | str) -> Ring | None:
    """Return the Ring for ``value`` or None if it names no ring."""
    if isinstance(value, Ring):
        return value
    if isinstance(value, str):
        try:
            return Ring(value.lower())
        except ValueError:
            return None
    return None


def _matches(entry: str, name: str) -> bool:
    if COMPOUND_SEPARATOR in entry:
        return name in entry.split(COMPOUND_SEPARATOR)
    return entry == name


def find_position(name: str) -> Position | None:
    """Find the position of a chord by name.

    Rings are searched outer to inner. Returns None when nothing matches.
    """
    if not isinstance(name, str):
        return None
    for ring in _RING_ORDER:
        for index, entry in enumerate(CIRCLE_POSITIONS[ring]):
            if _matches(entry, name):
                return Position(ring, index)
    logger.debug("No position for chord %r", name)
    return None


def chord_name_at(ring: Ring, index: int) -> str:
    """Table entry at a position (compound names are returned whole)."""
    return CIRCLE_POSITIONS[ring][index % POSITIONS_PER_RING]


def position_id(ring: Ring, index: int) -> str:
    """Stable string key, e.g. ``"major-0"``."""
    return f"{ring.value}-{index}"


def polar_coordinates(ring: Ring, index: int) -> tuple[float, float]:
    """(angle, radius) of a chord's placement point."""
    return (index_angle(index % POSITIONS_PER_RING), POINT_RADII[ring])


def to_coordinate(
    ring: Ring,
    index: int,
    center: tuple[float, float] = DEFAULT_CENTER,
) -> tuple[float, float]:
    """Cartesian placement point of a chord."""
    angle, radius = polar_coordinates(ring, index)
    return polar_to_cartesian(angle, radius, center)


def polygon_points(
    positions: Iterable[Position],
    center: tuple[float, float] = DEFAULT_CENTER,
) -> list[tuple[float, float]]:
    return [to_coordinate(p.ring, p.index, center) for p in positions]


def position_coordinate_map(
    center: tuple[float, float] = DEFAULT_CENTER,
) -> dict[str, tuple[float, float]]:
    """Placement point of all 36 positions keyed by ``position_id``."""
    return {
        position_id(ring, index): to_coordinate(ring, index, center)
        for ring in _RING_ORDER
        for index in range(POSITIONS_PER_RING)
    }


def are_adjacent(a: Position, b: Position) -> bool:
    """True if two sectors visually merge.

    Same ring: neighbouring indices, 0 and 11 included. Different rings:
    same or neighbouring index.
    """
    distance = circular_distance(a.index, b.index)
    if a.ring == b.ring:
        return distance == 1
    return distance <= 1


def clockwise_key(position: Position) -> tuple[int, int]:
    # Index 0 is at 12 o'clock and indices grow clockwise
    return (position.index % POSITIONS_PER_RING, position.ring.rank)


def sort_clockwise(positions: Iterable[Position]) -> list[Position]:
    """Order positions clockwise from the top; outer ring first at equal index."""
    return sorted(positions, key=clockwise_key)


def ring_segments(positions: Iterable[Position]) -> list[RingSegment]:
    """Split each ring's selected indices into contiguous clockwise runs.

    A run ending at 11 and a run starting at 0 are one run across the top.
    """
    by_ring: dict[Ring, set[int]] = {}
    for p in positions:
        by_ring.setdefault(p.ring, set()).add(p.index % POSITIONS_PER_RING)

    segments: list[RingSegment] = []
    for ring in _RING_ORDER:
        if ring not in by_ring:
            continue
        indices = sorted(by_ring[ring])
        runs: list[list[int]] = [[indices[0]]]
        for idx in indices[1:]:
            if idx - runs[-1][-1] == 1:
                runs[-1].append(idx)
            else:
                runs.append([idx])

        if len(runs) > 1 and runs[0][0] == 0 and runs[-1][-1] == POSITIONS_PER_RING - 1:
            wrapped = runs.pop()
            runs[0] = wrapped + runs[0]

        segments.extend(RingSegment(ring, tuple(run)) for run in runs)
    return segments


def adjacent_groups(positions: Iterable[Position]) -> list[list[Position]]:
    """Connected components of a selection under ``are_adjacent``.

    Duplicates are collapsed. Groups are ordered by their first member in
    clockwise order; members within a group are clockwise-sorted.
    """
    unique = list(dict.fromkeys(positions))
    parent = list(range(len(unique)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i in range(len(unique)):
        for j in range(i + 1, len(unique)):
            if are_adjacent(unique[i], unique[j]):
                parent[find(i)] = find(j)

    groups: dict[int, list[Position]] = {}
    for i, p in enumerate(unique):
        groups.setdefault(find(i), []).append(p)

    ordered = [sort_clockwise(g) for g in groups.values()]
    ordered.sort(key=lambda g: clockwise_key(g[0]))
    return ordered
