"""
FastAPI application entry point.

    uvicorn src.app_layer.main:app
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI

from config import setup_logging
from src.app_layer.dependencies import get_cached_settings
from src.app_layer.routers import assets, community, operations, session
from src.simulation_layer.engine import GameEngine

logger = logging.getLogger(__name__)


def create_app(engine: Optional[GameEngine] = None, start_clock: bool = True) -> FastAPI:
    """Build the API around one game session."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: create the session and start the tick driver
        if getattr(app.state, "engine", None) is None:
            setup_logging()
            app.state.engine = GameEngine(settings=get_cached_settings())
        driver = None
        if start_clock:
            driver = asyncio.create_task(app.state.engine.run())
            logger.info("Tick driver started")
        yield
        # Shutdown: stop the driver
        if driver is not None:
            app.state.engine.stop()
            driver.cancel()
            with suppress(asyncio.CancelledError):
                await driver

    app = FastAPI(
        title="PuraVida: Village Tourism Simulation API",
        description="Tourism business simulation with a shared community project",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = engine

    app.include_router(session.router, prefix="/api/v1/session", tags=["session"])
    app.include_router(operations.router, prefix="/api/v1/operations", tags=["operations"])
    app.include_router(community.router, prefix="/api/v1/community", tags=["community"])
    app.include_router(assets.router, prefix="/api/v1/assets", tags=["assets"])

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
