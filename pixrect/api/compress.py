"""POST /api/compress, /api/decompress, /api/render."""

from __future__ import annotations

import io
import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from pixrect.codec.colors import argb_to_hex
from pixrect.codec.compressor import compress_bitmap, error_literal
from pixrect.codec.parser import parse_palette, parse_rect_run
from pixrect.codec.serializer import EncodedBitmap
from pixrect.dependencies import get_partition_config
from pixrect.engine.config import PartitionConfig
from pixrect.errors import BitmapError
from pixrect.models.requests import CompressRequest, EncodedBitmapModel
from pixrect.models.responses import CompressResponse, DecompressResponse, ErrorInfo
from pixrect.utils.rasterizer import rasterize, render_image

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_encoded(req: EncodedBitmapModel) -> EncodedBitmap:
    return EncodedBitmap(m=req.m, p=req.p, w=req.w, h=req.h, s=req.s)


@router.post("/compress", response_model=CompressResponse)
async def compress(
    req: CompressRequest,
    config: PartitionConfig = Depends(get_partition_config),
) -> CompressResponse:
    start = time.perf_counter()
    try:
        encoded = compress_bitmap(req.rows, req.palette, config)
    except BitmapError as e:
        logger.warning("Compress rejected (%s): %s", e.kind, e)
        return CompressResponse(
            ok=False,
            literal=error_literal(e),
            error=ErrorInfo(kind=e.kind, message=str(e)),
        )

    elapsed = (time.perf_counter() - start) * 1000
    return CompressResponse(
        ok=True,
        bitmap=EncodedBitmapModel(**encoded.as_dict()),
        literal=encoded.to_literal(),
        rectangle_count=len(parse_rect_run(encoded.m)),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/decompress", response_model=DecompressResponse)
async def decompress(
    req: EncodedBitmapModel,
    config: PartitionConfig = Depends(get_partition_config),
) -> DecompressResponse:
    encoded = _to_encoded(req)
    try:
        rows = rasterize(encoded, config)
        palette = {label: argb_to_hex(argb) for label, argb in parse_palette(encoded.p).items()}
    except BitmapError as e:
        raise HTTPException(status_code=422, detail={"kind": e.kind, "message": str(e)}) from e
    return DecompressResponse(rows=rows, palette=palette)


@router.post("/render")
async def render(
    req: EncodedBitmapModel,
    config: PartitionConfig = Depends(get_partition_config),
) -> Response:
    try:
        image = render_image(_to_encoded(req), config=config)
    except BitmapError as e:
        raise HTTPException(status_code=422, detail={"kind": e.kind, "message": str(e)}) from e
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return Response(content=buf.getvalue(), media_type="image/png")
