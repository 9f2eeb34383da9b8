"""Quadtree nodes and the quartering rule shared by build and render.

Below the root, nodes never store their rectangle. Callers rebuild it
top-down with ``quadrants()``, so the same rule must be used wherever a tree
is walked alongside a grid.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from quadseg.engine.stats import RegionStats


@dataclass
class QuadNode:
    """One region of the partition: a leaf, or an internal node with four children.

    ``stats`` may be the very same object as a sibling's after a merge;
    ``children`` are owned exclusively. Only the root returned by ``build``
    carries ``shape``, the (rows, cols) of the grid it covers.
    """

    stats: RegionStats
    children: list[QuadNode] | None = field(default=None)
    shape: tuple[int, int] | None = None

    def __post_init__(self) -> None:
        if self.children is not None:
            self.children = list(self.children)
            if len(self.children) == 0:
                self.children = None
            elif len(self.children) != 4:
                raise ValueError(
                    f"a quadtree node has 0 or 4 children, got {len(self.children)}"
                )

    @property
    def is_leaf(self) -> bool:
        return self.children is None


def quadrants(height: int, width: int) -> list[tuple[slice, slice]]:
    """Row/column slices of the NW, NE, SW, SE sub-rectangles.

    Floor halves go to the west/north side; odd remainders land east/south.
    """
    h_half = height // 2
    w_half = width // 2
    top, bottom = slice(0, h_half), slice(h_half, height)
    left, right = slice(0, w_half), slice(w_half, width)
    return [(top, left), (top, right), (bottom, left), (bottom, right)]


def iter_leaves(node: QuadNode) -> Iterator[QuadNode]:
    """Leaves in NW, NE, SW, SE depth-first order."""
    if node.is_leaf:
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def depth(node: QuadNode) -> int:
    """Height of the tree; a lone leaf has depth 0."""
    if node.is_leaf:
        return 0
    return 1 + max(depth(child) for child in node.children)


def count_nodes(node: QuadNode) -> int:
    if node.is_leaf:
        return 1
    return 1 + sum(count_nodes(child) for child in node.children)


def distinct_stats(node: QuadNode) -> int:
    """Number of distinct statistics objects among the leaves.

    After coarsening this is the number of flat regions in the rendering.
    """
    return len({id(leaf.stats) for leaf in iter_leaves(node)})
