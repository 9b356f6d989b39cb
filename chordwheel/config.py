"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    chordwheel_env: str = "development"
    chordwheel_log_level: str = "info"

    # Visible canvas and offscreen buffer size (square)
    chordwheel_canvas_size: int = 380

    # Default outline strategy: edge, scanline or contour
    chordwheel_strategy: str = "edge"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
