"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from pixrect.engine.config import PartitionConfig


class Settings(BaseSettings):
    pixrect_env: str = "development"
    pixrect_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Target canvas edge for the encoded scale
    canvas_size: int = 400
    split_vertical_dominoes: bool = True

    # Request size limits
    max_side: int = 4096
    max_scale: int = 1024
    max_render_px: int = 16_777_216

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def partition_config(self) -> PartitionConfig:
        return PartitionConfig(
            canvas_size=self.canvas_size,
            split_vertical_dominoes=self.split_vertical_dominoes,
            max_side=self.max_side,
            max_render_px=self.max_render_px,
        )


settings = Settings()
