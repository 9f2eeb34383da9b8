"""Splitter — build a quadtree by recursive variance-driven quartering."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from quadseg.engine.config import SegmentationConfig
from quadseg.engine.stats import RegionStats
from quadseg.engine.tree import QuadNode, count_nodes, depth, quadrants

logger = logging.getLogger(__name__)


def build(grid: NDArray, config: SegmentationConfig | None = None) -> QuadNode:
    """Split ``grid`` into a quadtree of homogeneous regions.

    Args:
        grid: 2D array of numeric samples (rows × cols). Sub-regions are
            numpy views; the sample buffer is never copied.
        config: min_area / deviation_threshold. Defaults apply when omitted.

    Returns:
        Root node whose statistics cover the whole grid.
    """
    config = config or SegmentationConfig()
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ValueError(f"expected a 2D grid of samples, got shape {grid.shape}")
    height, width = grid.shape
    if height == 0 or width == 0:
        raise ValueError(f"cannot build a quadtree from an empty {height}x{width} grid")

    root = _split(grid, config.min_area, config.deviation_threshold)
    root.shape = (height, width)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built quadtree over %dx%d: %d nodes, depth %d",
            width, height, count_nodes(root), depth(root),
        )
    return root


def _split(view: NDArray, min_area: int, threshold: float) -> QuadNode:
    stats = RegionStats.from_samples(view)
    height, width = view.shape
    if height * width <= min_area or stats.deviation() <= threshold:
        return QuadNode(stats)

    children = [
        _split(view[rows, cols], min_area, threshold)
        for rows, cols in quadrants(height, width)
    ]
    return QuadNode(stats, children)
