"""Leaf-node polar geometry helpers. No engine imports.

Angles follow the mathematical convention (radians, counter-clockwise,
y up). Screen coordinates have y pointing down, so the y component is
subtracted from the centre.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

# 12 positions per ring: one slot every 30°.
POSITIONS_PER_RING = 12
SLOT_ANGLE = math.pi / 6


def index_angle(index: float) -> float:
    """Angle of a (possibly fractional) slot index. Index 0 is at the top."""
    return math.pi / 2 - index * SLOT_ANGLE


def polar_to_cartesian(
    angle: float,
    radius: float,
    center: tuple[float, float] = (190.0, 190.0),
) -> tuple[float, float]:
    """Convert (angle, radius) around ``center`` to screen (x, y)."""
    cx, cy = center
    return (cx + radius * math.cos(angle), cy - radius * math.sin(angle))


def sector_bounds(index: int) -> tuple[float, float]:
    """(leading, trailing) angles of a sector, leading > trailing.

    The sector spans slot positions [index - 0.5, index + 0.5]; moving
    clockwise means decreasing angle.
    """
    return (index_angle(index - 0.5), index_angle(index + 0.5))


def circular_distance(a: int, b: int, n: int = POSITIONS_PER_RING) -> int:
    """Shortest distance between two indices on a ring of ``n`` slots."""
    diff = abs(a - b) % n
    return min(diff, n - diff)


def cell_polar_grid(
    width: int,
    height: int,
    center: tuple[float, float],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Radius and clockwise slot position for every cell centre of a grid.

    Returns ``(radius, slot)`` arrays of shape (height, width). ``slot`` is
    the continuous clockwise position in units of sectors, shifted by half a
    sector and wrapped to [0, 12), so ``floor(slot)`` is the index of the
    sector containing the cell.
    """
    cx, cy = center
    xs = np.arange(width, dtype=np.float64) + 0.5 - cx
    ys = cy - (np.arange(height, dtype=np.float64) + 0.5)
    dx, dy = np.meshgrid(xs, ys)

    radius = np.hypot(dx, dy)
    angle = np.arctan2(dy, dx)
    slot = np.mod((np.pi / 2 - angle) / SLOT_ANGLE + 0.5, POSITIONS_PER_RING)
    # np.mod can round up to exactly 12.0 for tiny negative inputs
    slot[slot >= POSITIONS_PER_RING] = 0.0
    return radius, slot
