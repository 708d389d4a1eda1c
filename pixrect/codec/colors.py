"""Color resolution and ARGB packing.

Palette values are resolved with Pillow's ``ImageColor`` so any CSS-style
spec works: names, ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``, ``hsl()``.
Explicit 3- or 4-tuples of 0-255 ints are taken as-is.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from PIL import ImageColor

from pixrect.errors import MalformedInput

RGBA = tuple[int, int, int, int]

_OPAQUE = 255
_U32 = 1 << 32
_I32_MAX = (1 << 31) - 1


def resolve_color(spec: Any) -> RGBA:
    """Resolve a palette value to (r, g, b, a), each in [0, 255]."""
    if isinstance(spec, str):
        try:
            r, g, b, a = ImageColor.getcolor(spec.strip(), "RGBA")
        except ValueError as e:
            raise MalformedInput(f"Unrecognized color {spec!r}") from e
        return (r, g, b, a)

    if isinstance(spec, Sequence) and len(spec) in (3, 4):
        try:
            channels = [int(c) for c in spec]
        except (TypeError, ValueError) as e:
            raise MalformedInput(f"Unrecognized color {spec!r}") from e
        if any(not 0 <= c <= 255 for c in channels):
            raise MalformedInput(f"Color channels out of range: {spec!r}")
        if len(channels) == 3:
            channels.append(_OPAQUE)
        r, g, b, a = channels
        return (r, g, b, a)

    raise MalformedInput(f"Unrecognized color {spec!r}")


def pack_argb(r: int, g: int, b: int, a: int = _OPAQUE) -> int:
    """Pack channels as a signed 32-bit ARGB integer (alpha in the top byte)."""
    value = (a & 0xFF) << 24 | (r & 0xFF) << 16 | (g & 0xFF) << 8 | (b & 0xFF)
    return value - _U32 if value > _I32_MAX else value


def unpack_argb(value: int) -> RGBA:
    """Inverse of ``pack_argb``; accepts the signed or unsigned form."""
    value &= 0xFFFFFFFF
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, (value >> 24) & 0xFF)


def argb_to_hex(value: int) -> str:
    """``#rrggbbaa`` form of a packed color."""
    r, g, b, a = unpack_argb(value)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
