"""Partition configuration: knobs of the decomposition and its encoding."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PartitionConfig:
    """Controls how a bitmap is partitioned and encoded."""

    # Output canvas edge in pixels; the scale is canvas_size // max(w, h)
    canvas_size: int = 400

    # Labels that mean "no fill": partitioned like any other label so the
    # rect-run covers every cell, but left out of the palette string
    whitespace_labels: frozenset[str] = field(default_factory=lambda: frozenset({" ", "_"}))

    # Emit 1-wide, 2-tall pieces as two 1x1 pieces (shorter encoding)
    split_vertical_dominoes: bool = True

    # Characters the rect-run and palette grammars reserve for numbers
    reserved_label_chars: frozenset[str] = field(
        default_factory=lambda: frozenset("0123456789-")
    )

    # Largest bitmap side accepted for compression or decoding
    max_side: int = 4096

    # Pixel budget (width * height * scale^2) of a rendered image
    max_render_px: int = 16_777_216

    def is_whitespace(self, label: str) -> bool:
        return label in self.whitespace_labels

    def scale_for(self, width: int, height: int) -> int:
        return self.canvas_size // max(width, height)
