"""POST /api/segment — quadtree split/merge of one uploaded image."""

from __future__ import annotations

import base64
import binascii
import logging
import math
import time

from fastapi import APIRouter, Depends, HTTPException

from quadseg.config import Settings
from quadseg.dependencies import get_settings
from quadseg.engine.config import SegmentationConfig
from quadseg.engine.pipeline import create_pipeline
from quadseg.models.requests import SegmentRequest
from quadseg.models.responses import SegmentResponse
from quadseg.utils.imaging import decode_image, encode_png, resize_to_power_of_two

logger = logging.getLogger(__name__)

router = APIRouter()


def _b64png(array) -> str:
    return base64.b64encode(encode_png(array)).decode("ascii")


def _finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return round(value, 3)


# Plain def: the pipeline is CPU-bound, FastAPI runs it in its threadpool
@router.post("/segment", response_model=SegmentResponse)
def segment(req: SegmentRequest, settings: Settings = Depends(get_settings)) -> SegmentResponse:
    start = time.perf_counter()

    try:
        raw = base64.b64decode(req.image, validate=True)
    except binascii.Error as e:
        raise HTTPException(status_code=422, detail=f"image is not valid base64: {e}") from e

    try:
        image = decode_image(raw)
        height, width = image.shape
        if max(height, width) > settings.quadseg_max_side:
            raise ValueError(
                f"image {width}x{height} exceeds the {settings.quadseg_max_side}px side limit"
            )
        if req.resize:
            image = resize_to_power_of_two(image)
        config = SegmentationConfig.from_settings(
            settings,
            min_area=req.min_area,
            deviation_threshold=req.deviation_threshold,
            coarsen=req.coarsen,
            until_stable=req.until_stable,
        )
    except ValueError as e:
        logger.info("Rejected segment request: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    result = create_pipeline(config).run(image)
    elapsed = (time.perf_counter() - start) * 1000

    return SegmentResponse(
        width=image.shape[1],
        height=image.shape[0],
        split_png=_b64png(result.split_image),
        merged_png=_b64png(result.merged_image) if result.merged_image is not None else None,
        leaf_count=result.leaf_count,
        region_count=result.region_count,
        depth=result.depth,
        merge_passes=result.merge_passes,
        psnr_split=_finite_or_none(result.psnr_split),
        psnr_merged=_finite_or_none(result.psnr_merged),
        processing_time_ms=round(elapsed, 1),
    )
