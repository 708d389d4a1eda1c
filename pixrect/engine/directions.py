"""Four-direction bitsets shared by every stage of the partition engine.

Each lattice corner stores three 4-bit masks, one bit per cardinal ray leaving
the corner:

    UP    = 0b1000
    RIGHT = 0b0100
    DOWN  = 0b0010
    LEFT  = 0b0001

Cell membership uses the same bits. The bit for a direction records the cell
clockwise of that ray:

    UP    -> cell above-right     (mask[y-1][x])
    RIGHT -> cell below-right     (mask[y][x])
    DOWN  -> cell below-left      (mask[y][x-1])
    LEFT  -> cell above-left      (mask[y-1][x-1])

Rotating a membership pattern one step right pairs every ray with the cell on
its other side, so XOR gives the rays the region boundary runs along and AND
gives the rays that run through the region's interior.

All helpers accept plain ints or numpy integer arrays.
"""

from __future__ import annotations

import enum
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

_MaskT = TypeVar("_MaskT", int, NDArray[np.uint8])

_FULL = 0b1111


class Direction(enum.IntFlag):
    LEFT = 1
    DOWN = 2
    RIGHT = 4
    UP = 8

    @property
    def opposite(self) -> "Direction":
        return Direction(rotate_right(rotate_right(int(self))))


HORIZONTAL = Direction.LEFT | Direction.RIGHT
VERTICAL = Direction.UP | Direction.DOWN


def rotate_right(mask: _MaskT) -> _MaskT:
    """Move every bit one ray clockwise: UP→RIGHT, RIGHT→DOWN, DOWN→LEFT, LEFT→UP."""
    return (mask >> 1) | ((mask & 1) << 3)


def boundary_bits(pattern: _MaskT) -> _MaskT:
    """Rays where exactly one of the two flanking cells is filled."""
    return pattern ^ rotate_right(pattern)


def concavity_bits(pattern: _MaskT) -> _MaskT:
    """Rays where both flanking cells are filled (interior rays)."""
    rotated = rotate_right(pattern)
    return (pattern | rotated) ^ (pattern ^ rotated)


def popcount(mask: int) -> int:
    return bin(mask & _FULL).count("1")


def is_reflex(concavity: int) -> bool:
    """A corner is reflex when exactly two of its rays are interior."""
    return popcount(concavity) == 2


def describe(mask: int) -> str:
    """Human-readable form, e.g. ``RIGHT|DOWN``. Used in log messages."""
    names = [d.name for d in (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT) if mask & d]
    return "|".join(names) if names else "NONE"
