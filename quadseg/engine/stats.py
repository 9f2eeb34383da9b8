"""RegionStats — aggregable first/second moment summary of a set of samples.

Two summaries combine by plain addition of their fields, so the statistics of
a rectangle equal the combination of the statistics of its quadrants (up to
floating-point rounding order).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike


@dataclass
class RegionStats:
    """Sample count, sum and sum of squares of one region.

    Instances are deliberately mutable: the merger grows one in place and
    then shares it between two leaves.
    """

    count: int = 0
    sum: float = 0.0
    sum_sq: float = 0.0

    @classmethod
    def from_samples(cls, values: ArrayLike) -> RegionStats:
        """Single scan over ``values`` (any shape, flattened)."""
        arr = np.asarray(values, dtype=np.float64)
        return cls(
            count=int(arr.size),
            sum=float(arr.sum()),
            sum_sq=float(np.square(arr).sum()),
        )

    @property
    def mean(self) -> float:
        if self.count == 0:
            raise ValueError("mean of an empty region is undefined")
        return self.sum / self.count

    def deviation(self) -> float:
        """Population standard deviation; 0 for an empty region."""
        if not self.count:
            return 0.0
        variance = (self.sum_sq - self.sum * self.sum / self.count) / self.count
        # Cancellation on near-uniform regions can leave a tiny negative value.
        return math.sqrt(max(variance, 0.0))

    def combine(self, other: RegionStats) -> RegionStats:
        return RegionStats(
            count=self.count + other.count,
            sum=self.sum + other.sum,
            sum_sq=self.sum_sq + other.sum_sq,
        )

    __add__ = combine

    def absorb(self, other: RegionStats) -> None:
        """In-place ``self = self ⊕ other``."""
        self.count += other.count
        self.sum += other.sum
        self.sum_sq += other.sum_sq


def combine(a: RegionStats, b: RegionStats) -> RegionStats:
    return a.combine(b)
