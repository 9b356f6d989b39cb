"""Contour extraction — scan-line perimeter strokes, Moore-neighbour boundary walk.

Grid cells are addressed as (x, y) = (column, row), matching canvas pixel
coordinates of the occupancy buffer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from chordwheel.utils.morphology import label_regions

if TYPE_CHECKING:
    from chordwheel.surface import DrawingSurface

# 8 neighbours in clockwise screen order (y grows downward), starting east.
_DIRECTIONS = (
    (1, 0),  # E
    (1, 1),  # SE
    (0, 1),  # S
    (-1, 1),  # SW
    (-1, 0),  # W
    (-1, -1),  # NW
    (0, -1),  # N
    (1, -1),  # NE
)
_DIRECTION_INDEX = {d: i for i, d in enumerate(_DIRECTIONS)}
_WEST = 4


def _spans(line: NDArray[np.bool_]) -> list[tuple[int, int]]:
    """(first, last) index of each maximal run of True in a 1-D array."""
    padded = np.concatenate(([False], line, [False])).astype(np.int8)
    edges = np.diff(padded)
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1) - 1
    return [(int(s), int(e)) for s, e in zip(starts, ends)]


def row_spans(grid: NDArray[np.bool_]) -> list[tuple[int, int, int]]:
    """Filled spans of every row as (y, x_start, x_end), inclusive."""
    filled = np.asarray(grid, dtype=bool)
    spans: list[tuple[int, int, int]] = []
    for y in range(filled.shape[0]):
        spans.extend((y, x0, x1) for x0, x1 in _spans(filled[y, :]))
    return spans


def column_spans(grid: NDArray[np.bool_]) -> list[tuple[int, int, int]]:
    """Filled spans of every column as (x, y_start, y_end), inclusive."""
    filled = np.asarray(grid, dtype=bool)
    spans: list[tuple[int, int, int]] = []
    for x in range(filled.shape[1]):
        spans.extend((x, y0, y1) for y0, y1 in _spans(filled[:, x]))
    return spans


def trace_perimeter(grid: NDArray[np.bool_], surface: DrawingSurface) -> int:
    """Stroke every filled row span, then every filled column span.

    Approximates the perimeter: horizontal spans contribute the region's
    left/right extents, vertical spans its top/bottom extents. Interior
    chords of concave regions are stroked too. Stroke style is whatever the
    surface currently has. Returns the number of strokes issued.
    """
    strokes = 0
    for y, x0, x1 in row_spans(grid):
        surface.begin_path()
        surface.move_to(x0, y)
        surface.line_to(x1, y)
        surface.stroke()
        strokes += 1

    for x, y0, y1 in column_spans(grid):
        surface.begin_path()
        surface.move_to(x, y0)
        surface.line_to(x, y1)
        surface.stroke()
        strokes += 1

    return strokes


def find_starting_point(grid: NDArray[np.bool_]) -> tuple[int, int] | None:
    """First filled cell in row-major order, as (x, y); None if empty."""
    filled = np.asarray(grid, dtype=bool)
    flat = filled.ravel()
    if not flat.any():
        return None
    y, x = divmod(int(np.argmax(flat)), filled.shape[1])
    return (x, y)


def trace_boundary(
    grid: NDArray[np.bool_],
    start: tuple[int, int] | None = None,
) -> list[tuple[int, int]]:
    """Moore-neighbour trace of the outer boundary of one region.

    ``start`` must be a filled cell whose west neighbour is empty; by default
    the row-major first filled cell is used. The walk scans the 8 neighbours
    clockwise beginning after the backtrack cell and stops when a
    (cell, backtrack) state repeats. Returns boundary cells in walk order,
    the start cell first; cells at pinch points can appear more than once.
    """
    filled = np.asarray(grid, dtype=bool)
    if start is None:
        start = find_starting_point(filled)
        if start is None:
            return []

    rows, cols = filled.shape

    def is_filled(x: int, y: int) -> bool:
        return 0 <= x < cols and 0 <= y < rows and bool(filled[y, x])

    x, y = start
    backtrack = _WEST
    contour = [start]
    seen = {(x, y, backtrack)}

    # Each (cell, direction) state is visited at most once
    for _ in range(8 * filled.size):
        found = None
        for k in range(1, 9):
            d = (backtrack + k) % 8
            dx, dy = _DIRECTIONS[d]
            if is_filled(x + dx, y + dy):
                found = d
                break

        if found is None:
            # Isolated cell
            break

        dx, dy = _DIRECTIONS[found]
        px, py = _DIRECTIONS[(found - 1) % 8]
        backtrack = _DIRECTION_INDEX[(px - dx, py - dy)]
        x, y = x + dx, y + dy

        state = (x, y, backtrack)
        if state in seen:
            break
        seen.add(state)
        contour.append((x, y))

    return contour


def region_boundaries(grid: NDArray[np.bool_]) -> list[list[tuple[int, int]]]:
    """Outer boundary of every 8-connected region, in row-major order of
    their starting cells. Holes are not traced."""
    labels, count = label_regions(grid)
    boundaries = []
    for region in range(1, count + 1):
        boundaries.append(trace_boundary(labels == region))
    boundaries.sort(key=lambda b: (b[0][1], b[0][0]))
    return boundaries


def stroke_closed(surface: DrawingSurface, points: list[tuple[int, int]]) -> None:
    """Stroke ``points`` as one closed polyline."""
    if not points:
        return
    surface.begin_path()
    x0, y0 = points[0]
    surface.move_to(x0, y0)
    for x, y in points[1:]:
        surface.line_to(x, y)
    surface.close_path()
    surface.stroke()
