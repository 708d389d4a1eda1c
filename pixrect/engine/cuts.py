"""S3.01 / S3.02: Cut resolution.

S3.01 writes every kept diagonal into the corner grid as a cut. S3.02 is the
fallback for corners the independent set left concave: each gets a horizontal
cut extended to the nearest vertical boundary or cut. That fallback is not
re-optimized, so the rectangle count it produces can exceed the minimum.
"""

from __future__ import annotations

import logging

from pixrect.engine.context import PartitionContext
from pixrect.engine.corners import CornerGrid
from pixrect.engine.diagonals import Diagonal
from pixrect.engine.directions import HORIZONTAL, VERTICAL, Direction, describe
from pixrect.engine.registry import Phase, stage

logger = logging.getLogger(__name__)


def apply_diagonal(grid: CornerGrid, diagonal: Diagonal) -> None:
    """Cut along ``diagonal`` and mark both endpoint concavities resolved."""
    if diagonal.is_vertical:
        x = diagonal.x1
        grid.add_cut(x, diagonal.y1, Direction.DOWN)
        grid.resolve(x, diagonal.y1, Direction.DOWN)
        for y in range(diagonal.y1 + 1, diagonal.y2):
            grid.add_cut(x, y, VERTICAL)
        grid.add_cut(x, diagonal.y2, Direction.UP)
        grid.resolve(x, diagonal.y2, Direction.UP)
    else:
        y = diagonal.y1
        grid.add_cut(diagonal.x1, y, Direction.RIGHT)
        grid.resolve(diagonal.x1, y, Direction.RIGHT)
        for x in range(diagonal.x1 + 1, diagonal.x2):
            grid.add_cut(x, y, HORIZONTAL)
        grid.add_cut(diagonal.x2, y, Direction.LEFT)
        grid.resolve(diagonal.x2, y, Direction.LEFT)


def extend_cut(grid: CornerGrid, x: int, y: int) -> int | None:
    """Run a horizontal cut from reflex corner (x, y) to the nearest vertical edge.

    The cut leaves through the corner's open horizontal side. Returns the x of
    the corner it stopped at, or None if the corner has no horizontal concavity.
    """
    if grid.has_concavity(x, y, Direction.RIGHT):
        step, out, back = 1, Direction.RIGHT, Direction.LEFT
    elif grid.has_concavity(x, y, Direction.LEFT):
        step, out, back = -1, Direction.LEFT, Direction.RIGHT
    else:
        return None

    grid.add_cut(x, y, out)
    cx = x + step
    while not grid.has_boundary(cx, y, VERTICAL):
        grid.add_cut(cx, y, HORIZONTAL)
        cx += step
    grid.add_cut(cx, y, back)
    return cx


@stage(
    id="S3.01",
    phase=Phase.CUTS,
    dependencies=["S2.01"],
    description="Apply the kept diagonals as cuts",
)
def apply_kept_diagonals(ctx: PartitionContext) -> None:
    if ctx.corners is None:
        raise ValueError("corner grid missing")
    for diagonal in ctx.kept_diagonals:
        apply_diagonal(ctx.corners, diagonal)


@stage(
    id="S3.02",
    phase=Phase.CUTS,
    dependencies=["S3.01"],
    description="Extend a cut from every corner still concave",
)
def patch_residual_concavities(ctx: PartitionContext) -> None:
    grid = ctx.corners
    if grid is None:
        raise ValueError("corner grid missing")
    # Snapshot first: patching adds cut rays but never clears concavity bits.
    for x, y in list(grid.reflex_corners()):
        corner = grid.corner(x, y)
        stop = extend_cut(grid, x, y)
        if stop is not None:
            ctx.patched_corners.append((x, y))
            logger.debug(
                "  corner (%d, %d) %s cut to x=%d", x, y, describe(corner.concavity), stop
            )
    if ctx.patched_corners:
        logger.debug("label %r: %d concave corners patched", ctx.label, len(ctx.patched_corners))
