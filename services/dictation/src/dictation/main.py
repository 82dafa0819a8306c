"""
Dictation service entry point for Memoria.

Creates the FastAPI application, configures structured logging, registers
the alignment, WebSocket and health routers, and exposes Prometheus
metrics.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from memoria_common.config import get_settings
from memoria_common.logging import configure_logging

from dictation.health import router as health_router
from dictation.routers import align, ws

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, then log shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    logger.info("dictation_service_starting", thresholds=settings.thresholds)
    yield
    logger.info("dictation_service_stopped")


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(title="Memoria Dictation Service", version="0.1.0", lifespan=lifespan)
    app.include_router(align.router, prefix="/api/v1")
    app.include_router(ws.router)
    app.include_router(health_router)
    app.mount("/metrics", make_asgi_app())
    return app


app = create_app()


def main() -> None:
    """Run the dictation service with Uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "dictation.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
