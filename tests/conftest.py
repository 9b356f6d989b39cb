"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from chordwheel.engine.highlighter import ChordHighlighter
from chordwheel.engine.positions import Position, Ring
from chordwheel.surface import RasterSurface


# Sample selections

SINGLE_SECTOR = [Position(Ring.MAJOR, 0)]

ADJACENT_PAIR = [Position(Ring.MAJOR, 0), Position(Ring.MAJOR, 1)]

# I, IV, V in C plus the relative minor: one connected shape
C_MAJOR_PROGRESSION = ["C", "F", "G", "Am"]

# Two shapes on opposite sides of the circle
OPPOSITE_PAIR = [Position(Ring.MAJOR, 0), Position(Ring.MAJOR, 6)]


def grid_to_text(grid) -> str:
    """Render a boolean grid as rows of ``X`` and ``.`` for readable asserts."""
    return "\n".join("".join("X" if cell else "." for cell in row) for row in grid)


class RecordingSurface:
    """Drawing surface that records every call instead of painting."""

    def __init__(self, width: int = 380, height: int = 380) -> None:
        self.width = width
        self.height = height
        self.stroke_color = (0, 0, 0, 255)
        self.fill_color = (0, 0, 0, 255)
        self.line_width = 1.0
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._data = np.zeros((height, width, 4), dtype=np.uint8)

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def begin_path(self) -> None:
        self._record("begin_path")

    def close_path(self) -> None:
        self._record("close_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def arc(self, cx, cy, radius, start_angle, end_angle, anticlockwise=False) -> None:
        self._record("arc", cx, cy, radius, start_angle, end_angle, anticlockwise)

    def quadratic_curve_to(self, cpx, cpy, x, y) -> None:
        self._record("quadratic_curve_to", cpx, cpy, x, y)

    def fill(self) -> None:
        self._record("fill")

    def stroke(self) -> None:
        self._record("stroke")

    def get_image_data(self):
        self._record("get_image_data")
        return self._data.copy()

    def put_image_data(self, data, x=0, y=0) -> None:
        self._record("put_image_data", x, y)
        self._data = np.array(data, dtype=np.uint8)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)


@pytest.fixture
def raster_surface() -> RasterSurface:
    return RasterSurface(380, 380)


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def highlighter(raster_surface: RasterSurface) -> ChordHighlighter:
    return ChordHighlighter(raster_surface)


@pytest.fixture
def recording_highlighter(recording_surface: RecordingSurface) -> ChordHighlighter:
    return ChordHighlighter(recording_surface)
