"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    patternvora_env: str = "development"
    patternvora_log_level: str = "info"

    # Canvas defaults for the CLI
    default_canvas_size: int = 2000
    default_aspect_ratio: str = "1:1"

    # TrueType font used to rasterize text silhouettes (empty = Pillow default)
    text_font_path: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
