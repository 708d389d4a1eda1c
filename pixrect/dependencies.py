"""Per-request providers for the API routes."""

from __future__ import annotations

from pixrect.config import Settings, settings
from pixrect.engine.config import PartitionConfig


def get_settings() -> Settings:
    return settings


def get_partition_config() -> PartitionConfig:
    """Partition knobs from the environment, rebuilt per request."""
    return get_settings().partition_config()
