"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from pixrect.engine.registry import get_registry
from pixrect.models.responses import HealthResponse, StageInfo

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        stages_registered=get_registry().count,
    )


@router.get("/stages", response_model=list[StageInfo])
async def stages() -> list[StageInfo]:
    """Partition stages in execution order."""
    return [
        StageInfo(
            id=s.id,
            phase=s.phase.name.lower(),
            dependencies=s.dependencies,
            description=s.description,
        )
        for s in get_registry().resolve_order()
    ]
