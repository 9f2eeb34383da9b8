"""FastAPI dependency injection."""

from __future__ import annotations

from quadseg.config import settings


def get_settings():
    return settings
