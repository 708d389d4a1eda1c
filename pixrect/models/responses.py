"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pixrect.models.requests import EncodedBitmapModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class StageInfo(BaseModel):
    id: str
    phase: str
    dependencies: list[str] = Field(default_factory=list)
    description: str = ""


class ErrorInfo(BaseModel):
    kind: str
    message: str


class CompressResponse(BaseModel):
    ok: bool
    bitmap: EncodedBitmapModel | None = None
    literal: str = ""
    rectangle_count: int = 0
    processing_time_ms: float = 0.0
    error: ErrorInfo | None = None


class DecompressResponse(BaseModel):
    rows: list[str] = Field(default_factory=list)
    palette: dict[str, str] = Field(default_factory=dict)
