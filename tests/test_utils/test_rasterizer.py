"""Tests for the sector rasterizer."""

import math

import numpy as np
import pytest

from chordwheel.engine.positions import SECTOR_RADII, Position, Ring
from chordwheel.utils.morphology import label_regions
from chordwheel.utils.rasterizer import RegionRasterizer, outline_to_rgba
from tests.conftest import ADJACENT_PAIR, SINGLE_SECTOR


@pytest.fixture
def rasterizer() -> RegionRasterizer:
    return RegionRasterizer(380, 380, (190.0, 190.0), SECTOR_RADII)


def _sector_area(ring: Ring) -> float:
    inner, outer = SECTOR_RADII[ring]
    return 0.5 * (outer**2 - inner**2) * (math.pi / 6)


def test_empty_selection(rasterizer):
    buffer = rasterizer.render([])
    assert buffer.shape == (380, 380)
    assert not buffer.any()
    assert rasterizer.fill_count == 0


def test_buffer_is_reused(rasterizer):
    first = rasterizer.render(SINGLE_SECTOR)
    second = rasterizer.render([])
    assert first is second is rasterizer.buffer
    assert not second.any()


@pytest.mark.parametrize("ring", [Ring.MAJOR, Ring.MINOR, Ring.DIMINISHED])
def test_sector_area_close_to_analytic(rasterizer, ring):
    rasterizer.render([Position(ring, 5)])
    expected = _sector_area(ring)
    assert abs(rasterizer.fill_count - expected) / expected < 0.03


def test_sector_placement(rasterizer):
    # Row 40 is 150px above the centre: the middle of the outer ring's top sector
    assert rasterizer.sector_mask(Position(Ring.MAJOR, 0))[40, 190]
    assert rasterizer.sector_mask(Position(Ring.DIMINISHED, 6))[260, 190]
    assert rasterizer.sector_mask(Position(Ring.MINOR, 3))[190, 300]
    assert not rasterizer.sector_mask(Position(Ring.MAJOR, 0))[190, 190]


def test_duplicates_change_nothing(rasterizer):
    once = rasterizer.render(SINGLE_SECTOR).copy()
    twice = rasterizer.render(SINGLE_SECTOR * 2).copy()
    assert np.array_equal(once, twice)


@pytest.mark.parametrize("ring", [Ring.MAJOR, Ring.MINOR, Ring.DIMINISHED])
def test_ring_sectors_tile_without_overlap(rasterizer, ring):
    masks = [rasterizer.sector_mask(Position(ring, i)) for i in range(12)]
    stacked = np.sum(masks, axis=0)
    assert stacked.max() == 1

    inner, outer = SECTOR_RADII[ring]
    ys, xs = np.mgrid[0:380, 0:380]
    r = np.hypot(xs + 0.5 - 190.0, 190.0 - (ys + 0.5))
    annulus = (r >= inner) & (r < outer)
    assert np.array_equal(stacked.astype(bool), annulus)


def test_rings_do_not_overlap(rasterizer):
    a = rasterizer.sector_mask(Position(Ring.MAJOR, 2))
    b = rasterizer.sector_mask(Position(Ring.MINOR, 2))
    assert not (a & b).any()


def test_adjacent_sectors_merge(rasterizer):
    separate = sum(int(rasterizer.sector_mask(p).sum()) for p in ADJACENT_PAIR)
    buffer = rasterizer.render(ADJACENT_PAIR)
    assert rasterizer.fill_count == separate
    _, count = label_regions(buffer)
    assert count == 1


def test_index_wraps(rasterizer):
    assert np.array_equal(
        rasterizer.sector_mask(Position(Ring.MAJOR, 12)),
        rasterizer.sector_mask(Position(Ring.MAJOR, 0)),
    )


def test_clips_to_small_canvas():
    small = RegionRasterizer(100, 100, (50.0, 50.0), SECTOR_RADII)
    buffer = small.render([Position(Ring.MAJOR, 0)])
    assert buffer.shape == (100, 100)
    assert not buffer.any()


def test_outline_to_rgba():
    bitmap = np.array([[True, False], [False, True]])
    image = outline_to_rgba(bitmap, (255, 0, 0, 255))
    assert image.shape == (2, 2, 4)
    assert image.dtype == np.uint8
    assert tuple(image[0, 0]) == (255, 0, 0, 255)
    assert tuple(image[0, 1]) == (0, 0, 0, 0)
