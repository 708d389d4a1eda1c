"""Tests for the rect-run / palette writer."""

from pixrect.codec.colors import pack_argb, unpack_argb
from pixrect.codec.compressor import compress_bitmap
from pixrect.codec.parser import parse_palette
from pixrect.codec.serializer import EncodedBitmap, encode_palette, encode_rect, encode_rect_run
from pixrect.engine.config import PartitionConfig
from pixrect.engine.context import Rectangle
from pixrect.utils.rasterizer import decode_rectangles
from tests.conftest import random_bitmap


def test_rect_tokens_omit_ones():
    assert encode_rect(Rectangle(0, 0, 1, 1, "a")) == "a"
    assert encode_rect(Rectangle(0, 0, 3, 1, "a")) == "3a"
    assert encode_rect(Rectangle(0, 0, 1, 4, "a")) == "-4a"
    assert encode_rect(Rectangle(0, 0, 12, 10, "#")) == "12-10#"


def test_rect_run_is_sorted_row_major():
    rects = [
        Rectangle(0, 1, 2, 1, "b"),
        Rectangle(1, 0, 1, 1, "a"),
        Rectangle(0, 0, 1, 1, "b"),
    ]
    assert encode_rect_run(rects) == "ba2b"


def test_palette_skips_whitespace():
    palette = {"r": "red", " ": "white", "k": (0, 0, 0), "_": "blue"}
    assert encode_palette(palette) == "-65536r-16777216k"


def test_palette_whitespace_is_configurable():
    config = PartitionConfig(whitespace_labels=frozenset())
    assert encode_palette({" ": "red"}, config) == "-65536 "


def test_palette_uses_given_resolver():
    assert encode_palette({"x": "anything"}, resolve=lambda spec: (0, 0, 255, 255)) == "-16776961x"


def test_literal_layout():
    encoded = EncodedBitmap(m="2-2a", p="-65536a", w=2, h=2, s=200)
    assert encoded.to_literal() == '{\n  m:"2-2a",\n  p:"-65536a",\n  w:2,\n  h:2,\n  s:200,\n}'


def test_literal_escapes_quotes():
    encoded = EncodedBitmap(m='"\\', p="", w=2, h=1, s=200)
    assert 'm:"\\"\\\\"' in encoded.to_literal()


def test_decoded_bitmaps_encode_to_the_same_strings(rng):
    palette = {"a": "red", "b": "blue", " ": "white", "_": "black"}
    for _ in range(100):
        encoded = compress_bitmap(random_bitmap(rng, "ab _"), palette)
        assert encode_rect_run(decode_rectangles(encoded)) == encoded.m
        repacked = "".join(
            f"{pack_argb(*unpack_argb(argb))}{label}"
            for label, argb in parse_palette(encoded.p).items()
        )
        assert repacked == encoded.p
