"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pixrect.config import settings


class CompressRequest(BaseModel):
    rows: list[str] = Field(..., description="Bitmap rows, one character per cell")
    palette: dict[str, str | list[int]] = Field(
        ...,
        description="Label → color (CSS color string or [r, g, b(, a)])",
    )


class EncodedBitmapModel(BaseModel):
    m: str = Field(..., description="Rect-run string")
    p: str = Field("", description="Palette string")
    w: int = Field(..., ge=1, le=settings.max_side, description="Bitmap width in cells")
    h: int = Field(..., ge=1, le=settings.max_side, description="Bitmap height in cells")
    # 0 is what a compress response carries for bitmaps wider than the canvas
    s: int = Field(1, ge=0, le=settings.max_scale, description="Pixels per cell")
