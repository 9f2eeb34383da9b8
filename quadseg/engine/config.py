"""Thresholds controlling split and merge."""

from __future__ import annotations

import math
from dataclasses import dataclass

from quadseg.config import Settings, settings as default_settings

# Regions of at most this many samples are never split (5×5 block).
DEFAULT_MIN_AREA = 25
# Population standard deviation, in intensity units, below which a region is
# considered homogeneous.
DEFAULT_DEVIATION_THRESHOLD = 5.8


@dataclass
class SegmentationConfig:
    """Controls the split/merge passes."""

    # Split stops at or below this area (samples)
    min_area: int = DEFAULT_MIN_AREA
    # Split stops, and merge is allowed, at or below this deviation
    deviation_threshold: float = DEFAULT_DEVIATION_THRESHOLD

    # Run the sibling-merge pass after splitting
    coarsen: bool = True
    # Repeat the merge pass until nothing changes (see merger.coarsen_until_stable)
    until_stable: bool = False
    max_coarsen_passes: int = 32

    def __post_init__(self) -> None:
        if isinstance(self.min_area, bool) or int(self.min_area) != self.min_area:
            raise ValueError(f"min_area must be an integer, got {self.min_area!r}")
        self.min_area = int(self.min_area)
        if self.min_area < 1:
            raise ValueError(f"min_area must be >= 1, got {self.min_area}")
        threshold = float(self.deviation_threshold)
        if not math.isfinite(threshold) or threshold < 0:
            raise ValueError(
                f"deviation_threshold must be a finite non-negative number, got {self.deviation_threshold!r}"
            )
        self.deviation_threshold = threshold
        if self.max_coarsen_passes < 1:
            raise ValueError(f"max_coarsen_passes must be >= 1, got {self.max_coarsen_passes}")

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> SegmentationConfig:
        s = settings or default_settings
        values = {
            "min_area": s.quadseg_min_area,
            "deviation_threshold": s.quadseg_deviation_threshold,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
