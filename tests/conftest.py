"""Shared test fixtures."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


# 4×4 checkerboard of 2×2 quadrants: NW=0, NE=255, SW=255, SE=0
CHECKER_4X4 = np.array(
    [
        [0, 0, 255, 255],
        [0, 0, 255, 255],
        [255, 255, 0, 0],
        [255, 255, 0, 0],
    ],
    dtype=np.uint8,
)

UNIFORM_4X4 = np.full((4, 4), 100, dtype=np.uint8)


def gradient_grid(height: int, width: int) -> np.ndarray:
    """Diagonal ramp 0..255, never homogeneous at the default threshold."""
    rows = np.arange(height)[:, None]
    cols = np.arange(width)[None, :]
    total = max(height + width - 2, 1)
    return np.rint((rows + cols) * 255.0 / total).astype(np.uint8)


def noise_grid(height: int, width: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width), dtype=np.uint8)


def blocks_grid() -> np.ndarray:
    """64×64: flat background, a bright square and a mid-gray bar."""
    grid = np.full((64, 64), 40, dtype=np.uint8)
    grid[8:24, 8:24] = 220
    grid[40:48, 4:60] = 128
    return grid


@pytest.fixture
def checker() -> np.ndarray:
    return CHECKER_4X4.copy()


@pytest.fixture
def uniform() -> np.ndarray:
    return UNIFORM_4X4.copy()


@pytest.fixture
def blocks() -> np.ndarray:
    return blocks_grid()


@pytest.fixture
def gradient() -> np.ndarray:
    return gradient_grid(37, 53)
