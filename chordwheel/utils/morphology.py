"""Morphological operations on the occupancy grid — edge detection, region labels."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import binary_erosion
from skimage.measure import label

# Full 3×3 structuring element: a cell survives erosion only if all 8
# neighbours are filled.
_MOORE_STRUCTURE = np.ones((3, 3), dtype=bool)


def edge_detect(grid: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Boundary cells of the filled region.

    A filled cell is a boundary cell iff at least one of its 8 neighbours is
    empty. Cells outside the grid count as empty, so filled cells on the
    grid border are always boundary cells.
    """
    filled = np.asarray(grid, dtype=bool)
    interior = binary_erosion(filled, structure=_MOORE_STRUCTURE, border_value=0)
    return filled & ~interior


def label_regions(grid: NDArray[np.bool_]) -> tuple[NDArray[np.int32], int]:
    """Label 8-connected filled regions. Returns (labels, count)."""
    labels, count = label(
        np.asarray(grid, dtype=bool),
        connectivity=2,
        background=0,
        return_num=True,
    )
    return labels.astype(np.int32), int(count)
