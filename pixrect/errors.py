"""Error taxonomy. Every failure is a property of the input, never transient."""

from __future__ import annotations


class BitmapError(ValueError):
    """Base class for everything the compressor rejects."""

    kind = "BitmapError"


class MalformedInput(BitmapError):
    """Grid shape, label or encoded string the format cannot represent."""

    kind = "MalformedInput"


class UnknownLabel(BitmapError):
    """A filled label in the grid has no palette entry."""

    kind = "UnknownLabel"

    def __init__(self, labels: list[str]) -> None:
        self.labels = labels
        shown = ", ".join(repr(label) for label in labels)
        super().__init__(f"Labels missing from palette: {shown}")


class PartitionError(BitmapError):
    """A partition stage failed for one color label."""

    kind = "PartitionError"

    def __init__(self, label: str, errors: dict[str, str]) -> None:
        self.label = label
        self.errors = errors
        detail = "; ".join(f"{sid}: {msg}" for sid, msg in sorted(errors.items()))
        super().__init__(f"Partition of label {label!r} failed ({detail})")
