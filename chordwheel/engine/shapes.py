"""Vector shape helpers — sector paths, curved polygons, ring arcs.

These issue path commands on a ``DrawingSurface``. The surface uses canvas
angles (y down), so a mathematical angle ``a`` is passed as ``-a``;
increasing canvas angle runs clockwise on screen.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from chordwheel.engine.positions import (
    DEFAULT_CENTER,
    POINT_RADII,
    SECTOR_RADII,
    Position,
    Ring,
    RingSegment,
    polygon_points,
    ring_segments,
    sort_clockwise,
)
from chordwheel.utils.geometry import POSITIONS_PER_RING, index_angle, polar_to_cartesian, sector_bounds

if TYPE_CHECKING:
    from chordwheel.surface import DrawingSurface


def trace_sector_path(
    surface: DrawingSurface,
    position: Position,
    center: tuple[float, float] = DEFAULT_CENTER,
    sector_radii: dict[Ring, tuple[float, float]] | None = None,
) -> None:
    """Add one closed annular-sector subpath to the current path.

    Outer arc clockwise from the leading to the trailing edge, radial line
    inward at the trailing edge, inner arc back counter-clockwise, close.
    """
    inner, outer = (sector_radii or SECTOR_RADII)[position.ring]
    leading, trailing = sector_bounds(position.index % POSITIONS_PER_RING)
    cx, cy = center

    surface.move_to(*polar_to_cartesian(leading, outer, center))
    surface.arc(cx, cy, outer, -leading, -trailing, False)
    surface.line_to(*polar_to_cartesian(trailing, inner, center))
    surface.arc(cx, cy, inner, -trailing, -leading, True)
    surface.close_path()


def draw_chord_polygon(
    positions: Sequence[Position],
    surface: DrawingSurface,
    tension: float = 0.5,
    closed: bool = True,
    center: tuple[float, float] = DEFAULT_CENTER,
) -> bool:
    """Build a curved path through the placement points of ``positions``.

    Points are visited in clockwise-sort order and joined by quadratic
    curves whose control point sits ``tension`` of the way along each
    chord. The path is left for the caller to stroke or fill. Returns False
    (and draws nothing) for fewer than two positions.
    """
    if len(positions) < 2:
        return False

    points = polygon_points(sort_clockwise(positions), center)

    surface.begin_path()
    surface.move_to(*points[0])
    for previous, current in zip(points, points[1:]):
        control_x = previous[0] + (current[0] - previous[0]) * tension
        control_y = previous[1] + (current[1] - previous[1]) * tension
        surface.quadratic_curve_to(control_x, control_y, current[0], current[1])

    if closed and len(points) > 2:
        last, first = points[-1], points[0]
        control_x = last[0] + (first[0] - last[0]) * tension
        control_y = last[1] + (first[1] - last[1]) * tension
        surface.quadratic_curve_to(control_x, control_y, first[0], first[1])
    return True


def draw_chord_complex_shape(
    positions: Sequence[Position],
    surface: DrawingSurface,
    center: tuple[float, float] = DEFAULT_CENTER,
) -> list[RingSegment]:
    """Build one arc subpath per contiguous ring segment of ``positions``.

    Arcs run clockwise along each ring's placement radius from the first to
    the last index of the segment; a full ring becomes a full circle.
    Segments on different rings are not joined. Returns the segments drawn.
    """
    if len(positions) < 2:
        return []

    segments = ring_segments(positions)
    cx, cy = center

    surface.begin_path()
    for segment in segments:
        radius = POINT_RADII[segment.ring]
        start = index_angle(segment.start)
        if len(segment.indices) == POSITIONS_PER_RING:
            end = start - 2 * math.pi
        else:
            end = index_angle(segment.end)
        surface.move_to(*polar_to_cartesian(start, radius, center))
        surface.arc(cx, cy, radius, -start, -end, False)
    return segments


def draw_ring_segment(
    ring: Ring,
    start_index: int,
    end_index: int,
    surface: DrawingSurface,
    center: tuple[float, float] = DEFAULT_CENTER,
) -> None:
    """Stroke the arc of ``ring`` from ``start_index`` clockwise to ``end_index``.

    When ``end_index < start_index`` the arc passes through the top.
    """
    radius = POINT_RADII[ring]
    cx, cy = center
    start = index_angle(start_index % POSITIONS_PER_RING)
    end = index_angle(end_index % POSITIONS_PER_RING)

    surface.begin_path()
    surface.arc(cx, cy, radius, -start, -end, False)
    surface.stroke()
