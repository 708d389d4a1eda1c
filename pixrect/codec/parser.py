"""Read the rect-run / palette literal back into structured form.

Grammar:
    rect-run := (Int? ('-' Int)? Label)*
    palette  := (Int32 Label)*
Labels are any single character except digits and '-'.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pixrect.codec.serializer import EncodedBitmap
from pixrect.errors import MalformedInput


_RECT_TOKEN_RE = re.compile(r"([0-9]*)(?:-([0-9]+))?([^0-9-])", re.DOTALL)
_PALETTE_TOKEN_RE = re.compile(r"(-?[0-9]+)([^0-9-])", re.DOTALL)
_FIELD_RE = re.compile(r'(\w+)\s*:\s*("(?:[^"\\]|\\.)*"|-?\d+)', re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n"}
_REQUIRED_FIELDS = ("m", "p", "w", "h", "s")


@dataclass(frozen=True)
class RectToken:
    """One rect-run token. Its position comes from decoding order."""

    width: int
    height: int
    label: str


def parse_rect_run(text: str) -> list[RectToken]:
    tokens: list[RectToken] = []
    pos = 0
    while pos < len(text):
        match = _RECT_TOKEN_RE.match(text, pos)
        if match is None:
            raise MalformedInput(f"Bad rect-run token at offset {pos}: {text[pos:pos + 8]!r}")
        width = int(match.group(1)) if match.group(1) else 1
        height = int(match.group(2)) if match.group(2) else 1
        if width < 1 or height < 1:
            raise MalformedInput(f"Zero-sized rectangle at offset {pos}")
        tokens.append(RectToken(width, height, match.group(3)))
        pos = match.end()
    return tokens


def parse_palette(text: str) -> dict[str, int]:
    """Label → signed ARGB integer, in string order."""
    palette: dict[str, int] = {}
    pos = 0
    while pos < len(text):
        match = _PALETTE_TOKEN_RE.match(text, pos)
        if match is None:
            raise MalformedInput(f"Bad palette token at offset {pos}: {text[pos:pos + 12]!r}")
        palette[match.group(2)] = int(match.group(1))
        pos = match.end()
    return palette


def unescape(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


def parse_literal(text: str) -> EncodedBitmap:
    """Parse the ``{ m:"...", p:"...", w:.., h:.., s:.., }`` literal."""
    stripped = text.strip()
    if stripped.startswith("//"):
        raise MalformedInput(stripped.lstrip("/ ").removeprefix("ERROR:").strip())
    if not (stripped.startswith("{") and stripped.endswith("}")):
        raise MalformedInput("Literal must be wrapped in braces")

    fields: dict[str, str | int] = {}
    for key, raw in _FIELD_RE.findall(stripped):
        fields[key] = unescape(raw[1:-1]) if raw.startswith('"') else int(raw)

    missing = [k for k in _REQUIRED_FIELDS if k not in fields]
    if missing:
        raise MalformedInput(f"Literal is missing fields: {', '.join(missing)}")
    if not isinstance(fields["m"], str) or not isinstance(fields["p"], str):
        raise MalformedInput("Fields m and p must be strings")
    for key in ("w", "h", "s"):
        if not isinstance(fields[key], int):
            raise MalformedInput(f"Field {key} must be an integer")

    return EncodedBitmap(
        m=fields["m"],
        p=fields["p"],
        w=fields["w"],
        h=fields["h"],
        s=fields["s"],
    )
