"""Rasterization utilities — selected sectors to an occupancy grid, grid to RGBA.

The occupancy buffer is a boolean grid the size of the canvas. A cell is
filled when its centre lies inside a selected annular sector. Bounds are
half-open in both radius and angle, so neighbouring sectors tile the
diagram with no gap and no overlap.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterable

import numpy as np
from numpy.typing import NDArray

from chordwheel.utils.geometry import POSITIONS_PER_RING, cell_polar_grid

if TYPE_CHECKING:
    from chordwheel.engine.positions import Position, Ring

logger = logging.getLogger(__name__)

# Single marker value for occupied cells
FILLED = True


class RegionRasterizer:
    """Fills a fixed-size occupancy buffer with the union of selected sectors.

    The buffer is allocated once and cleared in place on every render; the
    returned array is the rasterizer's own buffer, valid until the next
    ``render`` call.
    """

    def __init__(
        self,
        width: int,
        height: int,
        center: tuple[float, float],
        sector_radii: dict[Ring, tuple[float, float]],
    ) -> None:
        self.width = width
        self.height = height
        self.center = center
        self.sector_radii = dict(sector_radii)
        self.buffer: NDArray[np.bool_] = np.zeros((height, width), dtype=np.bool_)

        # Cell-centre polar coordinates never change for a fixed centre
        radius, slot = cell_polar_grid(width, height, center)
        self._radius = radius
        self._slot_index = np.floor(slot).astype(np.int8)

    def sector_mask(self, position: Position) -> NDArray[np.bool_]:
        """Cells covered by one sector."""
        inner, outer = self.sector_radii[position.ring]
        index = position.index % POSITIONS_PER_RING
        return (
            (self._slot_index == index)
            & (self._radius >= inner)
            & (self._radius < outer)
        )

    def render(self, selection: Iterable[Position]) -> NDArray[np.bool_]:
        """Rebuild the buffer from scratch for ``selection``."""
        t0 = time.perf_counter()
        self.buffer.fill(False)

        count = 0
        for position in selection:
            self.buffer[self.sector_mask(position)] = FILLED
            count += 1

        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug(
            "Rasterized %d sectors (%d cells) in %.1fms",
            count,
            self.fill_count,
            elapsed,
        )
        return self.buffer

    @property
    def fill_count(self) -> int:
        return int(np.count_nonzero(self.buffer))


def outline_to_rgba(
    bitmap: NDArray[np.bool_],
    color: tuple[int, int, int, int],
) -> NDArray[np.uint8]:
    """Paint set cells in ``color`` on a fully transparent RGBA image."""
    rows, cols = bitmap.shape
    image = np.zeros((rows, cols, 4), dtype=np.uint8)
    image[bitmap] = color
    return image
