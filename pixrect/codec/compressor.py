"""Bitmap → literal, end to end.

``compress_bitmap`` raises ``BitmapError`` subclasses; ``compress_to_literal``
is the outer boundary and turns them into a single error literal instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pixrect.codec.colors import RGBA, resolve_color
from pixrect.codec.serializer import EncodedBitmap, encode_palette, encode_rect_run
from pixrect.engine.config import PartitionConfig
from pixrect.engine.partition import Rows, check_palette, partition_grid, to_label_grid
from pixrect.errors import BitmapError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "// ERROR: "


def compress_bitmap(
    rows: Rows,
    palette: Mapping[str, Any],
    config: PartitionConfig | None = None,
    resolve: Callable[[Any], RGBA] = resolve_color,
) -> EncodedBitmap:
    """Partition ``rows`` into rectangles and encode them with ``palette``."""
    config = config or PartitionConfig()
    grid = to_label_grid(rows, config)
    check_palette(grid, palette, config)
    # Resolve colors before partitioning so a bad color fails fast.
    palette_text = encode_palette(palette, config, resolve)

    rects = partition_grid(grid, config)
    height, width = grid.shape
    return EncodedBitmap(
        m=encode_rect_run(rects),
        p=palette_text,
        w=int(width),
        h=int(height),
        s=config.scale_for(int(width), int(height)),
    )


def error_literal(error: BitmapError) -> str:
    return f"{ERROR_PREFIX}{error}"


def compress_to_literal(
    rows: Rows,
    palette: Mapping[str, Any],
    config: PartitionConfig | None = None,
    resolve: Callable[[Any], RGBA] = resolve_color,
) -> str:
    """Like ``compress_bitmap`` but never raises for bad input."""
    try:
        return compress_bitmap(rows, palette, config, resolve).to_literal()
    except BitmapError as e:
        logger.warning("Bitmap rejected (%s): %s", e.kind, e)
        return error_literal(e)
