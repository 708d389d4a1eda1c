"""Bitmap-level partitioning: validation, per-label masks, global ordering."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pixrect.engine.config import PartitionConfig
from pixrect.engine.context import PartitionContext, Rectangle
from pixrect.engine.pipeline import Pipeline, create_pipeline
from pixrect.errors import MalformedInput, PartitionError, UnknownLabel

logger = logging.getLogger(__name__)

Rows = Sequence[str] | Sequence[Sequence[str]]


def _check_label(label: Any, config: PartitionConfig, where: str) -> None:
    if not isinstance(label, str) or len(label) != 1:
        raise MalformedInput(f"{where}: label {label!r} is not a single character")
    if label in config.reserved_label_chars:
        raise MalformedInput(f"{where}: label {label!r} is reserved by the encoding")


def to_label_grid(rows: Rows, config: PartitionConfig | None = None) -> NDArray[np.str_]:
    """Validate ``rows`` and return them as a 2-D array of one-character labels."""
    config = config or PartitionConfig()
    if isinstance(rows, np.ndarray):
        rows = rows.tolist()
    if isinstance(rows, str) or not isinstance(rows, Sequence):
        raise MalformedInput("Input bitmap must be a sequence of rows.")
    if len(rows) == 0:
        raise MalformedInput("Input bitmap has no rows.")

    try:
        grid_rows = [list(row) for row in rows]
    except TypeError as e:
        raise MalformedInput(f"Input bitmap rows must be strings or label sequences: {e}") from e
    width = len(grid_rows[0])
    if width == 0:
        raise MalformedInput("Input bitmap rows are empty.")
    if max(width, len(grid_rows)) > config.max_side:
        raise MalformedInput(
            f"Input bitmap is {width}x{len(grid_rows)}, larger than {config.max_side} per side."
        )
    for y, row in enumerate(grid_rows):
        if len(row) != width:
            raise MalformedInput("Input bitmap row length is not uniform.")
        for label in row:
            _check_label(label, config, f"row {y}")

    return np.array(grid_rows, dtype="<U1")


def check_palette(
    grid: NDArray[np.str_],
    palette: Mapping[str, Any],
    config: PartitionConfig | None = None,
) -> None:
    """Every filled label must have a palette entry; palette keys must be encodable."""
    config = config or PartitionConfig()
    for key in palette:
        _check_label(key, config, "palette")
    missing = [
        label
        for label in used_labels(grid)
        if label not in palette and not config.is_whitespace(label)
    ]
    if missing:
        raise UnknownLabel(missing)


def used_labels(grid: NDArray[np.str_]) -> list[str]:
    """Labels in order of first appearance, row-major."""
    return list(dict.fromkeys(grid.ravel().tolist()))


def label_masks(grid: NDArray[np.str_]) -> Iterator[tuple[str, NDArray[np.bool_], int, int]]:
    """Yield (label, cropped mask, x offset, y offset) for every label."""
    for label in used_labels(grid):
        full = grid == label
        ys = np.flatnonzero(full.any(axis=1))
        xs = np.flatnonzero(full.any(axis=0))
        y0, y1 = int(ys[0]), int(ys[-1])
        x0, x1 = int(xs[0]), int(xs[-1])
        yield label, full[y0 : y1 + 1, x0 : x1 + 1], x0, y0


def partition_label(
    label: str,
    mask: NDArray[np.bool_],
    x_offset: int = 0,
    y_offset: int = 0,
    config: PartitionConfig | None = None,
    pipeline: Pipeline | None = None,
) -> PartitionContext:
    """Run the stage pipeline on one label's mask in a fresh context."""
    ctx = PartitionContext(
        label=label,
        config=config or PartitionConfig(),
        mask=np.asarray(mask, dtype=bool),
        x_offset=x_offset,
        y_offset=y_offset,
    )
    (pipeline or create_pipeline()).run(ctx)
    if ctx.errors:
        raise PartitionError(label, ctx.errors)
    return ctx


def partition_grid(
    grid: NDArray[np.str_],
    config: PartitionConfig | None = None,
    pipeline: Pipeline | None = None,
) -> list[Rectangle]:
    """Partition an already validated label grid; rectangles sorted by (y, x)."""
    config = config or PartitionConfig()
    pipeline = pipeline or create_pipeline()
    start = time.perf_counter()

    rects: list[Rectangle] = []
    patched = 0
    for label, mask, x0, y0 in label_masks(grid):
        ctx = partition_label(label, mask, x0, y0, config=config, pipeline=pipeline)
        rects.extend(ctx.rectangles)
        patched += len(ctx.patched_corners)

    rects.sort(key=lambda r: r.sort_key)
    logger.info(
        "Partitioned %dx%d bitmap into %d rectangles (%d fallback cuts) in %.1fms",
        grid.shape[1],
        grid.shape[0],
        len(rects),
        patched,
        (time.perf_counter() - start) * 1000,
    )
    return rects


def partition_bitmap(
    rows: Rows,
    palette: Mapping[str, Any] | None = None,
    config: PartitionConfig | None = None,
    pipeline: Pipeline | None = None,
) -> list[Rectangle]:
    """Validate ``rows`` (and ``palette`` if given) and partition every label."""
    config = config or PartitionConfig()
    grid = to_label_grid(rows, config)
    if palette is not None:
        check_palette(grid, palette, config)
    return partition_grid(grid, config, pipeline)
