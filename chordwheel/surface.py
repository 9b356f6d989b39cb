"""Drawing surfaces the highlighter can paint on.

``DrawingSurface`` is the capability set the engine needs: path building,
fill, stroke, and whole-buffer pixel access. Angles passed to ``arc`` use
the HTML canvas convention (radians, y down, positive = clockwise on
screen).

``RasterSurface`` implements it on a Pillow RGBA image. Paths are
flattened to polylines; fills are alpha-composited so translucent colours
blend with what is already drawn.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

RGBA = tuple[int, int, int, int]

# Straight segments used to flatten one quadratic curve
_QUADRATIC_STEPS = 16
# Arc flattening: at most this many pixels of arc per segment
_ARC_STEP_PX = 2.0
_MIN_ARC_STEPS = 4


class DrawingSurface(Protocol):
    stroke_color: RGBA
    fill_color: RGBA
    line_width: float

    def begin_path(self) -> None: ...

    def close_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        anticlockwise: bool = False,
    ) -> None: ...

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None: ...

    def fill(self) -> None: ...

    def stroke(self) -> None: ...

    def get_image_data(self) -> NDArray[np.uint8]: ...

    def put_image_data(self, data: NDArray[np.uint8], x: int = 0, y: int = 0) -> None: ...


class _SubPath:
    def __init__(self, x: float, y: float) -> None:
        self.points: list[tuple[float, float]] = [(x, y)]
        self.closed = False


class RasterSurface:
    """Pillow-backed drawing surface."""

    def __init__(
        self,
        width: int = 380,
        height: int = 380,
        background: RGBA = (0, 0, 0, 0),
    ) -> None:
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), background)
        self.stroke_color: RGBA = (0, 0, 0, 255)
        self.fill_color: RGBA = (0, 0, 0, 255)
        self.line_width: float = 1.0
        self._subpaths: list[_SubPath] = []

    # ── Path building ──

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(_SubPath(x, y))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            # Canvas semantics: line_to on an empty path acts as move_to
            self.move_to(x, y)
            return
        self._subpaths[-1].points.append((x, y))

    def close_path(self) -> None:
        if not self._subpaths:
            return
        sub = self._subpaths[-1]
        sub.closed = True
        # Following commands start from the closed subpath's first point
        x0, y0 = sub.points[0]
        self._subpaths.append(_SubPath(x0, y0))

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        anticlockwise: bool = False,
    ) -> None:
        sweep = _arc_sweep(start_angle, end_angle, anticlockwise)
        steps = max(_MIN_ARC_STEPS, math.ceil(abs(sweep) * radius / _ARC_STEP_PX))
        points = [
            (
                cx + radius * math.cos(start_angle + sweep * i / steps),
                cy + radius * math.sin(start_angle + sweep * i / steps),
            )
            for i in range(steps + 1)
        ]
        # Canvas semantics: a straight line joins the current point to the arc
        self.line_to(*points[0])
        self._subpaths[-1].points.extend(points[1:])

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(cpx, cpy)
        x0, y0 = self._subpaths[-1].points[-1]
        for i in range(1, _QUADRATIC_STEPS + 1):
            t = i / _QUADRATIC_STEPS
            u = 1 - t
            self._subpaths[-1].points.append(
                (
                    u * u * x0 + 2 * u * t * cpx + t * t * x,
                    u * u * y0 + 2 * u * t * cpy + t * t * y,
                )
            )

    # ── Painting ──

    def fill(self) -> None:
        polygons = [s.points for s in self._subpaths if len(s.points) >= 3]
        if not polygons:
            return
        overlay = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for points in polygons:
            draw.polygon(points, fill=tuple(self.fill_color))
        self.image.alpha_composite(overlay)

    def stroke(self) -> None:
        lines = [s for s in self._subpaths if len(s.points) >= 2]
        if not lines:
            return
        width = max(1, int(round(self.line_width)))
        overlay = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for sub in lines:
            points = list(sub.points)
            if sub.closed and points[0] != points[-1]:
                points.append(points[0])
            draw.line(points, fill=tuple(self.stroke_color), width=width, joint="curve")
        self.image.alpha_composite(overlay)

    # ── Pixel access ──

    def get_image_data(self) -> NDArray[np.uint8]:
        """Copy of the whole surface as an (H, W, 4) uint8 array."""
        return np.array(self.image, dtype=np.uint8)

    def put_image_data(self, data: NDArray[np.uint8], x: int = 0, y: int = 0) -> None:
        """Replace pixels with ``data`` (no blending), like canvas putImageData."""
        data = np.asarray(data, dtype=np.uint8)
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA data, got shape {data.shape}")
        self.image.paste(Image.fromarray(data), (x, y))

    def clear(self) -> None:
        self.image.paste((0, 0, 0, 0), (0, 0, self.width, self.height))


def _arc_sweep(start: float, end: float, anticlockwise: bool) -> float:
    """Signed sweep of a canvas arc, following the canvas rules."""
    two_pi = 2 * math.pi
    if not anticlockwise:
        if end - start >= two_pi:
            return two_pi
        sweep = (end - start) % two_pi
    else:
        if start - end >= two_pi:
            return -two_pi
        sweep = -((start - end) % two_pi)
    return sweep
