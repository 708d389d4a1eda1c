"""S1.01: Diagonal generation.

A good diagonal joins two reflex corners on the same row or column through
the region's interior. Only rightward and downward scans are needed: the
reverse scans would find the same pairs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pixrect.engine.context import PartitionContext
from pixrect.engine.corners import CornerGrid
from pixrect.engine.directions import Direction
from pixrect.engine.registry import Phase, stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagonal:
    """Axis-aligned cut candidate. (x1, y1) is the top or left endpoint."""

    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2

    @property
    def length(self) -> int:
        return (self.x2 - self.x1) + (self.y2 - self.y1)

    def crosses(self, other: Diagonal) -> bool:
        """True if the two diagonals share any point, endpoints included.

        Parallel diagonals never cross: each reflex corner anchors at most one
        diagonal per axis.
        """
        if self.is_vertical == other.is_vertical:
            return False
        v, h = (self, other) if self.is_vertical else (other, self)
        return v.y1 <= h.y1 <= v.y2 and h.x1 <= v.x1 <= h.x2


def _scan(
    grid: CornerGrid,
    x: int,
    y: int,
    step: tuple[int, int],
    onward: Direction,
    facing: Direction,
) -> tuple[int, int] | None:
    """Walk from (x, y) along ``step`` to the nearest reflex corner facing back.

    Stops at the grid edge, at an absent corner, or where the segment ahead
    leaves the interior.
    """
    dx, dy = step
    cx, cy = x + dx, y + dy
    while grid.exists(cx, cy):
        if grid.is_reflex(cx, cy) and grid.has_concavity(cx, cy, facing):
            return cx, cy
        if not grid.has_concavity(cx, cy, onward):
            return None
        cx, cy = cx + dx, cy + dy
    return None


def find_diagonals(grid: CornerGrid) -> tuple[list[Diagonal], list[Diagonal]]:
    """Return (verticals, horizontals) in row-major order of their first endpoint."""
    verticals: list[Diagonal] = []
    horizontals: list[Diagonal] = []

    for x, y in grid.reflex_corners():
        if grid.has_concavity(x, y, Direction.RIGHT):
            end = _scan(grid, x, y, (1, 0), Direction.RIGHT, Direction.LEFT)
            if end is not None:
                horizontals.append(Diagonal(x, y, end[0], end[1]))
        if grid.has_concavity(x, y, Direction.DOWN):
            end = _scan(grid, x, y, (0, 1), Direction.DOWN, Direction.UP)
            if end is not None:
                verticals.append(Diagonal(x, y, end[0], end[1]))

    return verticals, horizontals


@stage(
    id="S1.01",
    phase=Phase.DIAGONALS,
    dependencies=["S0.01"],
    description="Pair facing reflex corners into candidate cuts",
)
def diagonal_generation(ctx: PartitionContext) -> None:
    if ctx.corners is None:
        raise ValueError("corner grid missing")
    ctx.verticals, ctx.horizontals = find_diagonals(ctx.corners)
    logger.debug(
        "label %r: %d vertical / %d horizontal diagonals",
        ctx.label,
        len(ctx.verticals),
        len(ctx.horizontals),
    )
