"""Merger — coarsen a built quadtree by unifying homogeneous sibling leaves.

Merging never changes tree shape. Two sibling leaves are merged by folding
the second one's statistics into the first and then pointing the second leaf
at the first one's statistics object, so both render the same mean.

Sibling pairs within a group of four (children in NW, NE, SW, SE order):

    rows:    (0, 1) and (2, 3)
    columns: (0, 2) and (1, 3)

Policy for one internal node:

1. If both row pairs can merge, merge them and stop.
2. Otherwise merge whichever column pairs can merge. If both did, stop.
3. If no column pair merged, fall back to whichever row pairs can merge.
4. Recurse into the four children.

``coarsen`` applies this once. It is not a fixed point: a second call may
merge more, because leaves enlarged by the first call are compared again.
``coarsen_until_stable`` is the separate mode that repeats until no pass
joins two distinct statistics objects.
"""

from __future__ import annotations

import logging

from quadseg.engine.config import SegmentationConfig
from quadseg.engine.tree import QuadNode

logger = logging.getLogger(__name__)


def can_merge(x: QuadNode, y: QuadNode, threshold: float) -> bool:
    return x.is_leaf and y.is_leaf and (x.stats + y.stats).deviation() <= threshold


def merge(x: QuadNode, y: QuadNode) -> None:
    """Fold ``y`` into ``x`` and make ``y`` share ``x``'s statistics object."""
    x.stats.absorb(y.stats)
    y.stats = x.stats


class _SiblingMerger:
    """One pass of the sibling policy over a tree."""

    def __init__(self, threshold: float, skip_aliased: bool = False) -> None:
        self.threshold = threshold
        # When set, a pair already sharing one statistics object is left alone
        self.skip_aliased = skip_aliased
        # Merges that joined two distinct statistics objects
        self.merged = 0

    def _merge(self, x: QuadNode, y: QuadNode) -> None:
        if x.stats is y.stats:
            if self.skip_aliased:
                return
        else:
            self.merged += 1
        merge(x, y)

    def visit(self, node: QuadNode) -> None:
        if node.is_leaf:
            return
        c = node.children
        t = self.threshold

        can_row1 = can_merge(c[0], c[1], t)
        can_row2 = can_merge(c[2], c[3], t)
        if can_row1 and can_row2:
            self._merge(c[0], c[1])
            self._merge(c[2], c[3])
            return

        can_col1 = can_merge(c[0], c[2], t)
        can_col2 = can_merge(c[1], c[3], t)
        if can_col1:
            self._merge(c[0], c[2])
        if can_col2:
            self._merge(c[1], c[3])
        if can_col1 and can_col2:
            return

        if not can_col1 and not can_col2:
            if can_row1:
                self._merge(c[0], c[1])
            if can_row2:
                self._merge(c[2], c[3])

        for child in c:
            self.visit(child)


def coarsen(tree: QuadNode, config: SegmentationConfig | None = None) -> None:
    """Apply one sibling-merge pass to ``tree`` in place."""
    config = config or SegmentationConfig()
    merger = _SiblingMerger(config.deviation_threshold)
    merger.visit(tree)
    logger.debug("Coarsen pass: %d sibling merges", merger.merged)


def coarsen_until_stable(tree: QuadNode, config: SegmentationConfig | None = None) -> int:
    """Repeat the sibling-merge pass until a pass joins no distinct regions.

    Pairs that already share statistics are not re-merged in this mode, so
    counts are never double-counted. Stops after ``config.max_coarsen_passes``.

    Returns:
        Number of passes run (the last one is the pass that found nothing,
        unless the cap was hit).
    """
    config = config or SegmentationConfig()
    passes = 0
    total = 0
    while passes < config.max_coarsen_passes:
        merger = _SiblingMerger(config.deviation_threshold, skip_aliased=True)
        merger.visit(tree)
        passes += 1
        total += merger.merged
        if merger.merged == 0:
            logger.debug("Coarsening stable after %d passes (%d merges)", passes, total)
            return passes
    logger.warning(
        "Coarsening not stable after %d passes (%d merges); stopping",
        passes,
        total,
    )
    return passes
