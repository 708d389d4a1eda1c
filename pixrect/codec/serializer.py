"""Write the compact rect-run / palette literal."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from pixrect.codec.colors import RGBA, pack_argb, resolve_color
from pixrect.engine.config import PartitionConfig
from pixrect.engine.context import Rectangle


@dataclass(frozen=True)
class EncodedBitmap:
    """Wire form of a compressed bitmap."""

    m: str  # rect-run string
    p: str  # palette string
    w: int
    h: int
    s: int

    def to_literal(self) -> str:
        return (
            "{\n"
            f'  m:"{escape(self.m)}",\n'
            f'  p:"{escape(self.p)}",\n'
            f"  w:{self.w},\n"
            f"  h:{self.h},\n"
            f"  s:{self.s},\n"
            "}"
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def encode_rect(rect: Rectangle) -> str:
    """``[width][-height]label``, each number omitted when it is 1."""
    width = str(rect.width) if rect.width > 1 else ""
    height = f"-{rect.height}" if rect.height > 1 else ""
    return f"{width}{height}{rect.label}"


def encode_rect_run(rects: Iterable[Rectangle]) -> str:
    """Concatenate rectangle tokens in row-major order of their top-left cells."""
    return "".join(encode_rect(r) for r in sorted(rects, key=lambda r: r.sort_key))


def encode_palette(
    palette: Mapping[str, Any],
    config: PartitionConfig | None = None,
    resolve: Callable[[Any], RGBA] = resolve_color,
) -> str:
    """``<argb><label>`` for every palette entry, whitespace labels skipped."""
    config = config or PartitionConfig()
    parts = []
    for label, spec in palette.items():
        if config.is_whitespace(label):
            continue
        parts.append(f"{pack_argb(*resolve(spec))}{label}")
    return "".join(parts)
