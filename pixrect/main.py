"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixrect.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.pixrect_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="pixrect",
        description="Pixel-art bitmap compression by minimum rectangle partition",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    stage_count = _register_stages()
    logger.info(
        "pixrect (%s): %d partition stages, canvas %dpx",
        settings.pixrect_env,
        stage_count,
        settings.canvas_size,
    )

    from pixrect.api.router import api_router

    app.include_router(api_router)

    return app


def _register_stages() -> int:
    """Import the engine so every @stage decorator fires; returns the stage count."""
    import pixrect.engine

    return pixrect.engine.get_registry().count


app = create_app()
