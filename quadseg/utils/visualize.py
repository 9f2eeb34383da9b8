"""Side-by-side matplotlib figure of original, split and merged images."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from numpy.typing import NDArray

from quadseg.engine.renderer import leaf_rects

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from quadseg.engine.tree import QuadNode

BG = "#0f0f1a"
TEXT = "#eee"
TEAL = "#4ECDC4"


def plot_segmentation(
    original: NDArray,
    split: NDArray,
    merged: NDArray | None = None,
    tree: QuadNode | None = None,
) -> Figure:
    """One panel per image; with ``tree`` the leaf rectangles are outlined on the split panel."""
    panels = [("original", original), ("split", split)]
    if merged is not None:
        panels.append(("merge", merged))

    fig, axes = plt.subplots(1, len(panels), figsize=(4 * len(panels), 4.4), facecolor=BG)
    for ax, (title, img) in zip(axes, panels):
        ax.imshow(img, cmap="gray", vmin=0, vmax=255, interpolation="nearest")
        ax.set_title(title, color=TEXT)
        ax.set_axis_off()

    if tree is not None:
        ax = axes[1]
        for row, col, h, w, _ in leaf_rects(tree, split.shape):
            # Pixel centers sit on integer coordinates in imshow
            ax.add_patch(
                Rectangle(
                    (col - 0.5, row - 0.5), w, h,
                    fill=False, edgecolor=TEAL, linewidth=0.4,
                )
            )

    fig.tight_layout()
    return fig
