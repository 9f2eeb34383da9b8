"""Tests for quadtree building."""

import numpy as np
import pytest

from quadseg.engine.config import SegmentationConfig
from quadseg.engine.splitter import build
from quadseg.engine.tree import depth, iter_leaves
from quadseg.engine.renderer import leaf_rects
from tests.conftest import CHECKER_4X4, UNIFORM_4X4, gradient_grid, noise_grid


def test_uniform_grid_is_single_leaf():
    tree = build(UNIFORM_4X4)
    assert tree.is_leaf
    assert tree.stats.mean == 100.0
    assert tree.stats.count == 16


def test_uniform_large_grid_is_single_leaf():
    tree = build(np.full((128, 96), 7, dtype=np.uint8))
    assert tree.is_leaf


def test_area_floor_wins_over_deviation():
    grid = np.array([[0, 0], [0, 100]], dtype=np.uint8)
    tree = build(grid, SegmentationConfig(min_area=25, deviation_threshold=5.8))
    assert tree.is_leaf
    assert tree.stats.mean == 25.0
    assert tree.stats.deviation() > 40


def test_checkerboard_splits_into_four_flat_leaves():
    tree = build(CHECKER_4X4, SegmentationConfig(min_area=1, deviation_threshold=0))
    assert not tree.is_leaf
    assert all(child.is_leaf for child in tree.children)
    assert [c.stats.mean for c in tree.children] == [0.0, 255.0, 255.0, 0.0]
    assert all(c.stats.count == 4 for c in tree.children)
    assert all(c.stats.deviation() == 0.0 for c in tree.children)


def test_internal_node_keeps_parent_stats():
    tree = build(CHECKER_4X4, SegmentationConfig(min_area=1, deviation_threshold=0))
    assert tree.stats.count == 16
    assert tree.stats.mean == pytest.approx(127.5)


def test_children_order_is_nw_ne_sw_se():
    grid = np.zeros((8, 8), dtype=np.uint8)
    grid[:4, 4:] = 50    # NE
    grid[4:, :4] = 100   # SW
    grid[4:, 4:] = 150   # SE
    tree = build(grid, SegmentationConfig(min_area=1, deviation_threshold=0))
    assert [c.stats.mean for c in tree.children] == [0.0, 50.0, 100.0, 150.0]


def test_odd_sizes_put_remainder_east_and_south():
    grid = noise_grid(5, 7)
    tree = build(grid, SegmentationConfig(min_area=1, deviation_threshold=0))
    counts = [c.stats.count for c in tree.children]
    # h_half=2, w_half=3 → NW 2×3, NE 2×4, SW 3×3, SE 3×4
    assert counts == [6, 8, 9, 12]


@pytest.mark.parametrize("shape", [(64, 64), (37, 53), (1, 40), (33, 1), (3, 3)])
def test_leaves_tile_the_grid_exactly(shape):
    grid = noise_grid(*shape, seed=11)
    tree = build(grid, SegmentationConfig(min_area=2, deviation_threshold=3.0))

    visits = np.zeros(shape, dtype=np.int32)
    for row, col, h, w, _ in leaf_rects(tree, shape):
        visits[row:row + h, col:col + w] += 1
    assert (visits == 1).all()
    assert sum(leaf.stats.count for leaf in iter_leaves(tree)) == shape[0] * shape[1]


def test_leaf_stats_match_their_rectangle():
    grid = gradient_grid(37, 53)
    tree = build(grid)
    for row, col, h, w, leaf in leaf_rects(tree, grid.shape):
        block = grid[row:row + h, col:col + w].astype(np.float64)
        assert leaf.stats.count == block.size
        assert leaf.stats.mean == pytest.approx(block.mean())


def test_leaves_are_small_or_homogeneous():
    config = SegmentationConfig()
    grid = gradient_grid(64, 64)
    tree = build(grid, config)
    for leaf in iter_leaves(tree):
        assert leaf.stats.count <= config.min_area or leaf.stats.deviation() <= config.deviation_threshold


def test_depth_is_logarithmic():
    tree = build(noise_grid(64, 64), SegmentationConfig(min_area=1, deviation_threshold=0))
    # 64 → 1 takes six halvings
    assert depth(tree) == 6


def test_build_does_not_modify_input():
    grid = noise_grid(16, 16)
    before = grid.copy()
    build(grid)
    assert np.array_equal(grid, before)


@pytest.mark.parametrize("shape", [(0, 5), (5, 0), (0, 0)])
def test_empty_grid_rejected(shape):
    with pytest.raises(ValueError, match="empty"):
        build(np.zeros(shape))


def test_non_2d_grid_rejected():
    with pytest.raises(ValueError, match="2D"):
        build(np.zeros((4, 4, 3)))


def test_accepts_nested_lists():
    tree = build([[1, 1], [1, 1]])
    assert tree.is_leaf
    assert tree.stats.mean == 1.0
