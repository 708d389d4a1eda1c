"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

import pixrect.engine  # noqa: F401  (registers stages)


# Sample bitmaps

SOLID_2X2 = ["aa", "aa"]

# 1x2 strips flanked by another label
STRIPS = ["bab", "bab"]

PLUS = [
    ".a.",
    "aaa",
    ".a.",
]

# Two notches facing each other across the middle row
NOTCHED = [
    "a.a",
    "aaa",
    "a.a",
]

# A frame around a one-cell hole
RING = [
    "aaa",
    "a a",
    "aaa",
]

STAIRS = [
    "a...",
    "aa..",
    "aaa.",
    "aaaa",
]

UNEVEN = ["aa", "a"]

# 10x10 one-color smiley from the demo page
SMILEY_LITERAL = (
    '{\n  m:"2 6h2  h6 h -6h-5 -3h4-5 -3h-5 -6h  hh2 4h2  h6 h 2 6h2 ",\n'
    '  p:"-16777216h",\n  w:10,\n  h:10,\n  s:40,\n}'
)

PALETTE = {"a": "red", "b": "#0000ff", ".": "white", " ": "transparent"}


def random_bitmap(rng: np.random.Generator, labels: str, max_side: int = 9) -> list[str]:
    """Random rows; blotchy regions come from upscaling a coarse grid."""
    h = int(rng.integers(1, max_side + 1))
    w = int(rng.integers(1, max_side + 1))
    coarse = rng.integers(0, len(labels), size=((h + 1) // 2, (w + 1) // 2))
    fine = np.kron(coarse, np.ones((2, 2), dtype=int))[:h, :w]
    noise = rng.random((h, w)) < 0.25
    fine[noise] = rng.integers(0, len(labels), size=int(noise.sum()))
    return ["".join(labels[i] for i in row) for row in fine]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240917)


@pytest.fixture
def palette() -> dict[str, str]:
    return dict(PALETTE)
