"""Paint each leaf's rectangle of the grid with its mean value."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import DTypeLike, NDArray

from quadseg.engine.tree import QuadNode, quadrants


def render(tree: QuadNode, out: NDArray) -> None:
    """Fill ``out`` in place from ``tree``.

    ``out`` must have the shape of the grid the tree was built from, as
    recorded on the root by ``build``. Hand-assembled roots without a shape
    are checked against the root sample count instead, which merging never
    touches.
    """
    if out.ndim != 2:
        raise ValueError(f"expected a 2D output view, got shape {out.shape}")
    if tree.shape is not None:
        if tuple(out.shape) != tuple(tree.shape):
            raise ValueError(
                f"output view {out.shape[1]}x{out.shape[0]} does not match "
                f"a tree built from a {tree.shape[1]}x{tree.shape[0]} grid"
            )
    elif tree.stats.count and out.size != tree.stats.count:
        raise ValueError(
            f"output view {out.shape[1]}x{out.shape[0]} ({out.size} cells) does not match "
            f"a tree built from {tree.stats.count} samples"
        )
    _render(tree, out)


def _render(node: QuadNode, view: NDArray) -> None:
    if node.is_leaf:
        if view.size == 0:
            return
        if node.stats.count == 0:
            raise RuntimeError(
                f"leaf covering {view.shape[1]}x{view.shape[0]} cells aggregated no samples"
            )
        view[...] = node.stats.mean
        return

    height, width = view.shape
    for child, (rows, cols) in zip(node.children, quadrants(height, width)):
        _render(child, view[rows, cols])


def render_new(
    tree: QuadNode,
    shape: tuple[int, int],
    dtype: DTypeLike = np.float64,
) -> NDArray:
    """Allocate an array of ``shape`` and render ``tree`` into it.

    Integer dtypes get the means rounded to nearest, like an image writer would.
    """
    buf = np.zeros(shape, dtype=np.float64)
    render(tree, buf)
    if np.issubdtype(np.dtype(dtype), np.integer):
        info = np.iinfo(dtype)
        return np.clip(np.rint(buf), info.min, info.max).astype(dtype)
    return buf.astype(dtype, copy=False)


def leaf_rects(
    tree: QuadNode,
    shape: tuple[int, int],
) -> Iterator[tuple[int, int, int, int, QuadNode]]:
    """Yield ``(row, col, height, width, leaf)`` in render order.

    Leaves over empty rectangles (from 1-wide strips) are skipped.
    """
    yield from _leaf_rects(tree, 0, 0, shape[0], shape[1])


def _leaf_rects(node: QuadNode, row: int, col: int, height: int, width: int):
    if node.is_leaf:
        if height and width:
            yield row, col, height, width, node
        return
    for child, (rows, cols) in zip(node.children, quadrants(height, width)):
        yield from _leaf_rects(
            child,
            row + rows.start,
            col + cols.start,
            rows.stop - rows.start,
            cols.stop - cols.start,
        )
