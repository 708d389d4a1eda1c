"""Rasterization utilities: rect-run back to a label grid, text or image.

Tokens carry no coordinates: each one is placed at the first uncovered cell
in row-major order, which is exactly where a (y, x)-sorted tiling puts it.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from pixrect.codec.colors import unpack_argb
from pixrect.codec.parser import parse_palette, parse_rect_run
from pixrect.codec.serializer import EncodedBitmap
from pixrect.engine.config import PartitionConfig
from pixrect.engine.context import Rectangle
from pixrect.errors import MalformedInput

# Fully transparent fill for whitespace labels and labels without a color.
_TRANSPARENT = (0, 0, 0, 0)


def decode_rectangles(
    encoded: EncodedBitmap, config: PartitionConfig | None = None
) -> list[Rectangle]:
    """Position every rect-run token on a w x h grid."""
    config = config or PartitionConfig()
    if encoded.w < 1 or encoded.h < 1:
        raise MalformedInput(f"Bad bitmap size {encoded.w}x{encoded.h}")
    if max(encoded.w, encoded.h) > config.max_side:
        raise MalformedInput(
            f"Bitmap size {encoded.w}x{encoded.h} exceeds {config.max_side} per side"
        )

    covered = np.zeros((encoded.h, encoded.w), dtype=bool)
    flat = covered.reshape(-1)
    cursor = 0
    rects: list[Rectangle] = []

    for token in parse_rect_run(encoded.m):
        while cursor < flat.size and flat[cursor]:
            cursor += 1
        if cursor == flat.size:
            raise MalformedInput("Rect-run has more rectangles than the bitmap has room for")
        y, x = divmod(cursor, encoded.w)
        if x + token.width > encoded.w or y + token.height > encoded.h:
            raise MalformedInput(
                f"Rectangle {token.width}x{token.height} at ({x}, {y}) overflows the bitmap"
            )
        block = covered[y : y + token.height, x : x + token.width]
        if block.any():
            raise MalformedInput(f"Rectangle at ({x}, {y}) overlaps an earlier one")
        block[...] = True
        rects.append(Rectangle(x, y, token.width, token.height, token.label))

    if not covered.all():
        raise MalformedInput("Rect-run leaves cells uncovered")
    return rects


def rasterize_rectangles(rects: list[Rectangle], width: int, height: int) -> NDArray[np.str_]:
    grid = np.full((height, width), "", dtype="<U1")
    for r in rects:
        grid[r.y : r.y + r.height, r.x : r.x + r.width] = r.label
    return grid


def rasterize(encoded: EncodedBitmap, config: PartitionConfig | None = None) -> list[str]:
    """Rows of labels, the inverse of compression."""
    grid = rasterize_rectangles(decode_rectangles(encoded, config), encoded.w, encoded.h)
    return ["".join(row) for row in grid.tolist()]


def grid_to_text(rows: list[str], empty: str = ".") -> str:
    """Printable form with whitespace labels shown as ``empty``."""
    return "\n".join(row.replace(" ", empty) for row in rows)


def render_image(
    encoded: EncodedBitmap,
    scale: int | None = None,
    config: PartitionConfig | None = None,
) -> Image.Image:
    """Paint the rectangles onto an RGBA image, ``scale`` pixels per cell."""
    config = config or PartitionConfig()
    scale = scale if scale is not None else encoded.s
    if scale < 1:
        raise MalformedInput(f"Scale must be at least 1, got {scale}")
    pixel_count = encoded.w * encoded.h * scale * scale
    if pixel_count > config.max_render_px:
        raise MalformedInput(
            f"Rendering {encoded.w}x{encoded.h} at scale {scale} needs {pixel_count} pixels, "
            f"more than {config.max_render_px}"
        )

    rects = decode_rectangles(encoded, config)
    colors = {label: unpack_argb(argb) for label, argb in parse_palette(encoded.p).items()}
    pixels = np.zeros((encoded.h * scale, encoded.w * scale, 4), dtype=np.uint8)
    for r in rects:
        pixels[
            r.y * scale : (r.y + r.height) * scale,
            r.x * scale : (r.x + r.width) * scale,
        ] = colors.get(r.label, _TRANSPARENT)
    return Image.fromarray(pixels)
