"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quadseg import __version__
from quadseg.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.quadseg_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="quadseg",
        description="Quadtree split-and-merge segmentation of grayscale images",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from quadseg.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
