"""Quadtree split-and-merge segmentation engine."""

from quadseg.engine.config import SegmentationConfig
from quadseg.engine.merger import can_merge, coarsen, coarsen_until_stable, merge
from quadseg.engine.pipeline import SegmentationPipeline, SegmentationResult, create_pipeline
from quadseg.engine.renderer import leaf_rects, render, render_new
from quadseg.engine.splitter import build
from quadseg.engine.stats import RegionStats, combine
from quadseg.engine.tree import QuadNode, quadrants

__all__ = [
    "SegmentationConfig",
    "RegionStats",
    "combine",
    "QuadNode",
    "quadrants",
    "build",
    "can_merge",
    "merge",
    "coarsen",
    "coarsen_until_stable",
    "render",
    "render_new",
    "leaf_rects",
    "SegmentationPipeline",
    "SegmentationResult",
    "create_pipeline",
]
