"""S4.01: Rectangle tracing over the fully cut corner grid."""

from __future__ import annotations

import logging

from pixrect.engine.context import PartitionContext, Rectangle
from pixrect.engine.corners import CornerGrid
from pixrect.engine.directions import Direction
from pixrect.engine.registry import Phase, stage

logger = logging.getLogger(__name__)

_TOP_LEFT = Direction.RIGHT | Direction.DOWN


def _is_top_left(grid: CornerGrid, x: int, y: int) -> bool:
    # The cell below-right must be filled, otherwise this is an outer notch.
    boundary = int(grid.boundary[y, x])
    return (boundary & _TOP_LEFT) == _TOP_LEFT and bool(int(grid.pattern[y, x]) & Direction.RIGHT)


def trace_rectangles(
    grid: CornerGrid,
    label: str,
    x_offset: int = 0,
    y_offset: int = 0,
    split_vertical_dominoes: bool = True,
) -> list[Rectangle]:
    """Emit one rectangle per top-left corner, in row-major order.

    A 1x2 (one wide, two tall) piece is emitted as two 1x1 pieces when
    ``split_vertical_dominoes`` is set: ``aa`` is one character shorter than
    ``-2a`` in the rect-run encoding.
    """
    rects: list[Rectangle] = []
    for y in range(grid.rows - 1):
        for x in range(grid.cols - 1):
            if not _is_top_left(grid, x, y):
                continue

            height = 1
            while not grid.has_boundary(x, y + height, Direction.RIGHT):
                height += 1
            width = 1
            while not grid.has_boundary(x + width, y, Direction.DOWN):
                width += 1

            left, top = x + x_offset, y + y_offset
            if split_vertical_dominoes and width == 1 and height == 2:
                rects.append(Rectangle(left, top, 1, 1, label))
                rects.append(Rectangle(left, top + 1, 1, 1, label))
            else:
                rects.append(Rectangle(left, top, width, height, label))
    return rects


@stage(
    id="S4.01",
    phase=Phase.TRACING,
    dependencies=["S0.01", "S3.02"],
    description="Trace rectangles from the cut corner grid",
)
def rectangle_tracing(ctx: PartitionContext) -> None:
    if ctx.corners is None:
        raise ValueError("corner grid missing")
    ctx.rectangles = trace_rectangles(
        ctx.corners,
        ctx.label,
        x_offset=ctx.x_offset,
        y_offset=ctx.y_offset,
        split_vertical_dominoes=ctx.config.split_vertical_dominoes,
    )
    logger.debug("label %r: %d rectangles", ctx.label, len(ctx.rectangles))
