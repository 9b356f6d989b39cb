"""ChordHighlighter — selection state and outline rendering.

The selected sectors are rasterized into an offscreen occupancy buffer,
then the outline of the filled area is extracted and drawn on the visible
surface. Only the perimeter of the union is drawn, so adjacent chords read
as one shape.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterable

import numpy as np
from numpy.typing import NDArray

from chordwheel.engine.config import HighlightConfig, Strategy
from chordwheel.engine.positions import Position, Ring, coerce_ring, find_position
from chordwheel.engine.shapes import trace_sector_path
from chordwheel.models.style import HighlightStyle
from chordwheel.utils.contour import region_boundaries, stroke_closed, trace_perimeter
from chordwheel.utils.geometry import POSITIONS_PER_RING
from chordwheel.utils.morphology import edge_detect, label_regions
from chordwheel.utils.rasterizer import RegionRasterizer, outline_to_rgba

if TYPE_CHECKING:
    from chordwheel.surface import DrawingSurface

logger = logging.getLogger(__name__)


class ChordHighlighter:
    """Highlights a set of chords in the circle of fifths."""

    def __init__(
        self,
        surface: DrawingSurface,
        center: tuple[float, float] | None = None,
        config: HighlightConfig | None = None,
        style: HighlightStyle | None = None,
    ) -> None:
        self.surface = surface
        self.config = config or HighlightConfig()
        self.style = style or HighlightStyle()
        self.center = center if center is not None else self.config.center
        self._selected: list[Position] = []

        self.rasterizer = RegionRasterizer(
            self.config.canvas_width,
            self.config.canvas_height,
            self.center,
            self.config.sector_radii,
        )

    # ── Selection ──

    @property
    def selected(self) -> tuple[Position, ...]:
        return tuple(self._selected)

    @property
    def is_empty(self) -> bool:
        return not self._selected

    def add_chord(self, chord_name: str) -> bool:
        """Add a chord by name. Returns False if the name is not on the circle."""
        position = find_position(chord_name)
        if position is None:
            return False
        self._selected.append(position)
        return True

    def add_chords(self, chord_names: Iterable[str]) -> list[str]:
        """Add several chords; returns the names that could not be placed."""
        missing = [name for name in chord_names if not self.add_chord(name)]
        if missing:
            logger.info("Unplaced chords: %s", ", ".join(map(str, missing)))
        return missing

    def add_chord_by_position(self, ring: Ring | str, index: int) -> bool:
        """Add a chord by ring and index. Returns False for an invalid position."""
        resolved = coerce_ring(ring)
        if resolved is None or not _is_index(index) or not 0 <= index < POSITIONS_PER_RING:
            logger.warning("Rejected position ring=%r index=%r", ring, index)
            return False
        self._selected.append(Position(resolved, int(index)))
        return True

    def remove_chord(self, chord_name: str) -> None:
        """Remove every selected entry at the chord's position."""
        position = find_position(chord_name)
        if position is None:
            return
        self._remove(position)

    def remove_chord_by_position(self, ring: Ring | str, index: int) -> None:
        """Remove every selected entry at a position; index 12 is index 0."""
        resolved = coerce_ring(ring)
        if resolved is None or not _is_index(index):
            return
        self._remove(Position(resolved, int(index) % POSITIONS_PER_RING))

    def _remove(self, position: Position) -> None:
        self._selected = [p for p in self._selected if p != position]

    def clear_all(self) -> None:
        self._selected = []

    # ── Rendering ──

    def render_buffer(self) -> NDArray[np.bool_]:
        """Rasterize the current selection into the offscreen buffer."""
        return self.rasterizer.render(self._selected)

    def draw(self, strategy: Strategy | str | None = None) -> None:
        """Draw the outline of the selected area on the surface.

        Does nothing when the selection is empty. Only EDGE output is
        byte-identical when repeated on one surface: SCANLINE and CONTOUR
        composite translucent strokes, so drawing twice darkens them.
        """
        if self.is_empty:
            return

        strategy = Strategy(strategy) if strategy is not None else self.config.strategy
        t0 = time.perf_counter()
        buffer = self.render_buffer()

        if strategy is Strategy.EDGE:
            self._draw_edges(buffer)
        elif strategy is Strategy.SCANLINE:
            self._apply_stroke_style()
            trace_perimeter(buffer, self.surface)
        else:
            self._apply_stroke_style()
            for boundary in region_boundaries(buffer):
                stroke_closed(self.surface, boundary)

        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug(
            "Drew %d chords (%s) in %.1fms",
            len(self._selected),
            strategy.value,
            elapsed,
        )

    def draw_fill(self) -> None:
        """Fill every selected sector with the translucent fill colour."""
        if self.is_empty:
            return
        self.surface.fill_color = self.style.fill_color
        self.surface.begin_path()
        for position in dict.fromkeys(self._selected):
            trace_sector_path(
                self.surface,
                position,
                self.center,
                self.config.sector_radii,
            )
        self.surface.fill()

    def region_count(self) -> int:
        """Number of separate highlighted shapes (8-connected)."""
        if self.is_empty:
            return 0
        _, count = label_regions(self.render_buffer())
        return count

    def _draw_edges(self, buffer: NDArray[np.bool_]) -> None:
        outline = edge_detect(buffer)
        self.surface.put_image_data(outline_to_rgba(outline, self.style.edge_color), 0, 0)

    def _apply_stroke_style(self) -> None:
        self.surface.stroke_color = self.style.outline_color
        self.surface.line_width = self.style.outline_width


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
