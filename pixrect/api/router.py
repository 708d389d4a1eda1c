"""Mounts every endpoint router under /api."""

from __future__ import annotations

from fastapi import APIRouter

from pixrect.api import compress, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(compress.router)
