"""PartitionContext, the per-color mutable state flowing through all stages.

One context is built for every color label of a bitmap and discarded once its
rectangles have been collected. Nothing in here is shared between labels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pixrect.engine.config import PartitionConfig

if TYPE_CHECKING:
    from pixrect.engine.corners import CornerGrid
    from pixrect.engine.diagonals import Diagonal


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned block of cells in bitmap coordinates."""

    x: int
    y: int
    width: int
    height: int
    label: str

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def sort_key(self) -> tuple[int, int]:
        """Row-major position of the top-left cell."""
        return (self.y, self.x)

    def cells(self) -> list[tuple[int, int]]:
        """All (x, y) cells covered by this rectangle."""
        return [
            (cx, cy)
            for cy in range(self.y, self.y + self.height)
            for cx in range(self.x, self.x + self.width)
        ]


@dataclass
class PartitionContext:
    """Shared state for the decomposition of a single color label."""

    label: str
    config: PartitionConfig = field(default_factory=PartitionConfig)
    # Bounding-box-cropped membership mask, True where the cell has ``label``
    mask: NDArray[np.bool_] = field(default_factory=lambda: np.zeros((0, 0), dtype=bool))
    # Offset of the cropped mask inside the full bitmap
    x_offset: int = 0
    y_offset: int = 0

    # --- Stage results ---
    corners: CornerGrid | None = None
    verticals: list[Diagonal] = field(default_factory=list)
    horizontals: list[Diagonal] = field(default_factory=list)
    # Independent-set flags, aligned with ``verticals`` / ``horizontals``
    keep_vertical: list[bool] = field(default_factory=list)
    keep_horizontal: list[bool] = field(default_factory=list)
    matching_size: int = 0
    # Corners that needed a fallback cut after the independent set was applied
    patched_corners: list[tuple[int, int]] = field(default_factory=list)
    rectangles: list[Rectangle] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return int(self.mask.shape[0])

    @property
    def width(self) -> int:
        return int(self.mask.shape[1]) if self.mask.ndim == 2 else 0

    @property
    def cell_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    @property
    def is_solid(self) -> bool:
        """True when the mask is one full rectangle (no concave corners possible)."""
        return self.mask.size > 0 and bool(self.mask.all())

    @property
    def kept_diagonals(self) -> list[Diagonal]:
        kept = [d for d, keep in zip(self.verticals, self.keep_vertical) if keep]
        kept.extend(d for d, keep in zip(self.horizontals, self.keep_horizontal) if keep)
        return kept
