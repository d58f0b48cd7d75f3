"""
FastAPI application factory.

Builds one LeakService per application at construction time and stores it on
``app.state``; the lifespan hook stops a running scheduler on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..models.config import AppConfig
from ..service import LeakService
from .routes import router

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None, service: Optional[LeakService] = None) -> FastAPI:
    """
    Create the leak training application.

    Args:
        config: Application configuration; defaults apply when omitted.
        service: Pre-built service instance, mainly for tests.
    """
    leak_service = service or LeakService(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Memory Leak Training Lab...")
        yield
        logger.info("Shutting down Memory Leak Training Lab...")
        app.state.leak_service.shutdown()

    app = FastAPI(
        title="Memory Leak Training Lab",
        description="Controllable memory leak workload for dump-analysis exercises",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.leak_service = leak_service
    app.include_router(router)
    return app
