"""Highlighter configuration — canvas geometry and rendering defaults."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from chordwheel.engine.positions import POINT_RADII, SECTOR_RADII, Ring


class Strategy(str, enum.Enum):
    """How the outline of the occupancy buffer reaches the surface."""

    EDGE = "edge"  # 8-neighbour edge bitmap, written with put_image_data
    SCANLINE = "scanline"  # per-row and per-column span strokes
    CONTOUR = "contour"  # Moore-neighbour boundary walk, one closed stroke per region


@dataclass
class HighlightConfig:
    """Controls the highlighter's raster geometry."""

    # Offscreen occupancy buffer, same size as the visible canvas
    canvas_width: int = 380
    canvas_height: int = 380

    # Diagram centre in canvas coordinates
    center: tuple[float, float] = (190.0, 190.0)

    # (inner, outer) radial bounds of each ring's sectors
    sector_radii: dict[Ring, tuple[float, float]] = field(
        default_factory=lambda: dict(SECTOR_RADII)
    )
    # Label placement radius of each ring
    point_radii: dict[Ring, float] = field(default_factory=lambda: dict(POINT_RADII))

    strategy: Strategy = Strategy.EDGE
