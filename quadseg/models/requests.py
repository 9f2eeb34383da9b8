"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SegmentRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image (PNG, JPEG, ...); converted to grayscale")
    min_area: int | None = Field(default=None, description="Override the minimum split area")
    deviation_threshold: float | None = Field(default=None, description="Override the deviation threshold")
    coarsen: bool = Field(default=True, description="Run the sibling-merge pass")
    until_stable: bool = Field(default=False, description="Repeat merging until nothing changes")
    resize: bool = Field(default=False, description="Resize to a power-of-two square first")
