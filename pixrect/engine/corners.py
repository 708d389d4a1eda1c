"""S0.01: Corner classification.

Every lattice point of the cropped mask gets a membership pattern of its four
touching cells, from which the boundary rays and the interior (concave) rays
follow. See ``pixrect.engine.directions`` for the bit layout.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pixrect.engine import directions as d
from pixrect.engine.context import PartitionContext
from pixrect.engine.registry import Phase, stage

# Set-bit count for every 4-bit value, for vectorized reflex detection.
_POPCOUNT = np.array([bin(i).count("1") for i in range(16)], dtype=np.uint8)


@dataclass(frozen=True)
class GridCorner:
    """Snapshot of one lattice corner."""

    x: int
    y: int
    pattern: int
    boundary: int
    concavity: int

    @property
    def is_reflex(self) -> bool:
        return d.is_reflex(self.concavity)


@dataclass
class CornerGrid:
    """(height+1) x (width+1) corner arrays of one cropped mask.

    ``boundary`` starts as the polygon boundary and collects cut rays as cuts
    are applied. ``concavity`` loses a bit whenever a cut resolves it.
    """

    pattern: NDArray[np.uint8]
    boundary: NDArray[np.uint8]
    concavity: NDArray[np.uint8]

    @property
    def rows(self) -> int:
        return int(self.pattern.shape[0])

    @property
    def cols(self) -> int:
        return int(self.pattern.shape[1])

    def exists(self, x: int, y: int) -> bool:
        return 0 <= y < self.rows and 0 <= x < self.cols and bool(self.pattern[y, x])

    def corner(self, x: int, y: int) -> GridCorner | None:
        if not self.exists(x, y):
            return None
        return GridCorner(
            x=x,
            y=y,
            pattern=int(self.pattern[y, x]),
            boundary=int(self.boundary[y, x]),
            concavity=int(self.concavity[y, x]),
        )

    def is_reflex(self, x: int, y: int) -> bool:
        return self.exists(x, y) and d.is_reflex(int(self.concavity[y, x]))

    def reflex_mask(self) -> NDArray[np.bool_]:
        return _POPCOUNT[self.concavity] == 2

    def reflex_corners(self) -> Iterator[tuple[int, int]]:
        """(x, y) of every reflex corner in row-major order."""
        for y, x in np.argwhere(self.reflex_mask()):
            yield int(x), int(y)

    def has_boundary(self, x: int, y: int, bits: int) -> bool:
        return bool(int(self.boundary[y, x]) & bits)

    def has_concavity(self, x: int, y: int, bits: int) -> bool:
        return bool(int(self.concavity[y, x]) & bits)

    def add_cut(self, x: int, y: int, bits: int) -> None:
        self.boundary[y, x] |= int(bits)

    def resolve(self, x: int, y: int, bits: int) -> None:
        self.concavity[y, x] &= ~int(bits) & 0b1111


def membership_patterns(mask: NDArray[np.bool_]) -> NDArray[np.uint8]:
    """4-bit cell membership pattern for every corner of ``mask``."""
    padded = np.pad(np.asarray(mask, dtype=bool), 1, constant_values=False).astype(np.uint8)
    up_left = padded[:-1, :-1]
    up_right = padded[:-1, 1:]
    down_left = padded[1:, :-1]
    down_right = padded[1:, 1:]
    return (
        (up_right << 3) | (down_right << 2) | (down_left << 1) | up_left
    ).astype(np.uint8)


def classify_corners(mask: NDArray[np.bool_]) -> CornerGrid:
    """Build the corner grid of a boolean mask.

    Corners no cell touches keep an all-zero pattern and count as absent.
    """
    pattern = membership_patterns(mask)
    return CornerGrid(
        pattern=pattern,
        boundary=d.boundary_bits(pattern).astype(np.uint8),
        concavity=d.concavity_bits(pattern).astype(np.uint8),
    )


@stage(
    id="S0.01",
    phase=Phase.CLASSIFY,
    description="Classify lattice corners by boundary and concavity",
)
def corner_classification(ctx: PartitionContext) -> None:
    ctx.corners = classify_corners(ctx.mask)
