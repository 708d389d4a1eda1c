"""Tests for rect-run decoding and rendering."""

import pytest

from pixrect.codec.compressor import compress_bitmap
from pixrect.codec.parser import parse_literal
from pixrect.codec.serializer import EncodedBitmap
from pixrect.engine.config import PartitionConfig
from pixrect.engine.context import Rectangle
from pixrect.errors import MalformedInput
from pixrect.utils.rasterizer import decode_rectangles, grid_to_text, rasterize, render_image
from tests.conftest import SMILEY_LITERAL


def test_smiley_decodes():
    rows = rasterize(parse_literal(SMILEY_LITERAL))
    assert len(rows) == 10
    assert all(len(row) == 10 for row in rows)
    assert rows[0] == "  hhhhhh  "
    assert rows[6] == "h h    h h"
    assert rows[9] == "  hhhhhh  "


def test_tokens_fill_first_free_cell():
    encoded = EncodedBitmap(m="-2ab-2cd", p="", w=3, h=2, s=1)
    assert decode_rectangles(encoded) == [
        Rectangle(0, 0, 1, 2, "a"),
        Rectangle(1, 0, 1, 1, "b"),
        Rectangle(2, 0, 1, 2, "c"),
        Rectangle(1, 1, 1, 1, "d"),
    ]
    assert rasterize(encoded) == ["abc", "adc"]


@pytest.mark.parametrize(
    "m, w, h, message",
    [
        ("3a", 2, 1, "overflows"),
        ("a-2ab2b", 3, 2, "overlaps"),
        ("aa", 1, 1, "more rectangles"),
        ("a", 2, 1, "uncovered"),
    ],
)
def test_bad_rect_runs(m, w, h, message):
    with pytest.raises(MalformedInput, match=message):
        decode_rectangles(EncodedBitmap(m=m, p="", w=w, h=h, s=1))


def test_grid_to_text():
    assert grid_to_text(["a ", " a"]) == "a.\n.a"


def test_render_colors():
    encoded = compress_bitmap(["ab", "a "], {"a": "red", "b": (0, 0, 255, 128)})
    image = render_image(encoded, scale=3)
    assert image.size == (6, 6)
    assert image.mode == "RGBA"
    assert image.getpixel((0, 0)) == (255, 0, 0, 255)
    assert image.getpixel((4, 1)) == (0, 0, 255, 128)
    assert image.getpixel((5, 5)) == (0, 0, 0, 0)


def test_render_uses_encoded_scale():
    encoded = compress_bitmap(["a"], {"a": "red"})
    assert render_image(encoded).size == (400, 400)


def test_decode_rejects_side_over_limit():
    config = PartitionConfig(max_side=8)
    with pytest.raises(MalformedInput, match="exceeds 8 per side"):
        decode_rectangles(EncodedBitmap(m="9a", p="", w=9, h=1, s=1), config)
    assert rasterize(EncodedBitmap(m="8a", p="", w=8, h=1, s=1), config) == ["aaaaaaaa"]


def test_render_checks_pixel_budget_before_drawing():
    config = PartitionConfig(max_render_px=100)
    encoded = EncodedBitmap(m="a", p="-65536a", w=1, h=1, s=20)
    with pytest.raises(MalformedInput, match="more than 100"):
        render_image(encoded, config=config)
    assert render_image(encoded, scale=10, config=config).size == (10, 10)
    # The budget check runs before the rect-run is decoded
    with pytest.raises(MalformedInput, match="more than 100"):
        render_image(EncodedBitmap(m="", p="", w=1, h=1, s=11), config=config)


def test_render_rejects_bad_scale():
    with pytest.raises(MalformedInput):
        render_image(EncodedBitmap(m="a", p="", w=1, h=1, s=1), scale=0)
