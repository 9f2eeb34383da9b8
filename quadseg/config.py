"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    quadseg_log_level: str = "info"

    # Segmentation defaults (overridable per request / CLI flag)
    quadseg_min_area: int = 25
    quadseg_deviation_threshold: float = 5.8

    # Largest image side accepted by the HTTP API
    quadseg_max_side: int = 4096

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
