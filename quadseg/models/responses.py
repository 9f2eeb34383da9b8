"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    default_min_area: int = 25
    default_deviation_threshold: float = 5.8


class SegmentResponse(BaseModel):
    width: int
    height: int
    split_png: str = Field(..., description="Base64 PNG of the raw quadtree partition")
    merged_png: str | None = Field(default=None, description="Base64 PNG after coarsening")
    leaf_count: int = 0
    region_count: int = 0
    depth: int = 0
    merge_passes: int = 0
    # None when the reconstruction is exact (JSON has no infinity)
    psnr_split: float | None = None
    psnr_merged: float | None = None
    processing_time_ms: float = 0.0
