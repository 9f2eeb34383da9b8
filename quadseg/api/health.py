"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from quadseg import __version__
from quadseg.config import settings
from quadseg.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        default_min_area=settings.quadseg_min_area,
        default_deviation_threshold=settings.quadseg_deviation_threshold,
    )
