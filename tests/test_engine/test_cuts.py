"""Tests for S3.01 / S3.02 cut resolution."""

import logging

import numpy as np

from pixrect.engine.context import PartitionContext
from pixrect.engine.corners import classify_corners, corner_classification
from pixrect.engine.cuts import apply_diagonal, extend_cut, patch_residual_concavities
from pixrect.engine.diagonals import Diagonal
from pixrect.engine.directions import Direction
from pixrect.engine.tracer import trace_rectangles
from tests.conftest import PLUS, RING


def _mask(rows: list[str]) -> np.ndarray:
    return np.array([[c == "a" for c in row] for row in rows])


def test_vertical_diagonal_resolves_both_endpoints():
    grid = classify_corners(_mask(PLUS))
    apply_diagonal(grid, Diagonal(1, 1, 1, 2))
    assert grid.has_boundary(1, 1, Direction.DOWN)
    assert grid.has_boundary(1, 2, Direction.UP)
    assert not grid.is_reflex(1, 1)
    assert not grid.is_reflex(1, 2)
    # The other end of the plus is untouched
    assert grid.is_reflex(2, 1)


def test_long_horizontal_diagonal_marks_interior_corners():
    rows = [
        "aaaaa",
        ".aaa.",
        "aaaaa",
    ]
    grid = classify_corners(_mask(rows))
    apply_diagonal(grid, Diagonal(1, 1, 4, 1))
    for x in (2, 3):
        assert grid.has_boundary(x, 1, Direction.LEFT)
        assert grid.has_boundary(x, 1, Direction.RIGHT)
    assert grid.has_boundary(1, 1, Direction.RIGHT)
    assert grid.has_boundary(4, 1, Direction.LEFT)


def test_extend_cut_runs_to_the_outer_wall():
    grid = classify_corners(_mask(["a.", "aa"]))
    assert extend_cut(grid, 1, 1) == 0
    assert grid.has_boundary(1, 1, Direction.LEFT)
    assert grid.has_boundary(0, 1, Direction.RIGHT)


def test_extend_cut_ignores_corner_without_horizontal_concavity():
    grid = classify_corners(_mask(["aa", "aa"]))
    # Top-left corner of a solid block is convex
    assert extend_cut(grid, 0, 0) is None


def test_l_shape_needs_a_fallback_cut():
    grid = classify_corners(_mask(["a.", "aa"]))
    unpatched = trace_rectangles(grid, "a")
    assert sum(r.area for r in unpatched) != 3

    ctx = PartitionContext(label="a", mask=_mask(["a.", "aa"]))
    corner_classification(ctx)
    patch_residual_concavities(ctx)
    assert ctx.patched_corners == [(1, 1)]
    rects = trace_rectangles(ctx.corners, "a")
    assert [(r.x, r.y, r.width, r.height) for r in rects] == [(0, 0, 1, 1), (0, 1, 2, 1)]


def test_ring_patches_every_hole_corner():
    ctx = PartitionContext(label="a", mask=_mask(RING))
    corner_classification(ctx)
    patch_residual_concavities(ctx)
    assert ctx.patched_corners == [(1, 1), (2, 1), (1, 2), (2, 2)]
    rects = trace_rectangles(ctx.corners, "a")
    assert [(r.x, r.y, r.width, r.height) for r in rects] == [
        (0, 0, 3, 1),
        (0, 1, 1, 1),
        (2, 1, 1, 1),
        (0, 2, 3, 1),
    ]


def test_fallback_cut_is_logged_with_its_concavity(caplog):
    ctx = PartitionContext(label="a", mask=_mask(["a.", "aa"]))
    corner_classification(ctx)
    with caplog.at_level(logging.DEBUG, logger="pixrect.engine.cuts"):
        patch_residual_concavities(ctx)
    assert "corner (1, 1) DOWN|LEFT cut to x=0" in caplog.text
