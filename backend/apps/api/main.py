# ============================================================
#  Gesture Orrery — FastAPI Application Factory
# ============================================================
"""
FastAPI application with:
  • REST endpoints for health, body catalogue, state and detection frames
  • WebSocket endpoint for streaming detection frames
  • CORS and request timing middleware
  • Loguru logging integration

NOTE: This is OPTIONAL. The core session (core/) runs without a server.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from backend.apps.api.dependencies import get_session
from backend.apps.api.middleware import RequestTimingMiddleware
from backend.apps.api.routes import router as api_router
from backend.config import settings
from backend.logging_config import setup_logging

_start_time: float = 0.0


def get_uptime() -> float:
    return time.time() - _start_time


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ANN001
    """Startup / shutdown lifecycle."""
    global _start_time
    _start_time = time.time()
    setup_logging(component="api")
    logger.info(
        "{} v{} starting  |  env={}  debug={}",
        settings.app_name,
        settings.app_version,
        settings.app_env,
        settings.debug,
    )
    get_session()
    yield
    session = get_session()
    if session.is_running:
        session.stop()
    get_session.cache_clear()
    logger.info("Gesture Orrery shutting down")


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "**Gesture Orrery**: two-hand control of an orbiting scene.\n\n"
            "Stream hand landmark frames in, read interaction state and focus out."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # ── Middleware ────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)

    # ── Routes ───────────────────────────────────────────────
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
