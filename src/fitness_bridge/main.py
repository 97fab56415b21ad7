"""Main FastAPI application for the fitness bridge."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import __version__
from .api import accelerometer, biometric, gps, notifications, sensors
from .bridge import SensorBridge
from .config import Settings, settings as default_settings
from .errors import BridgeError
from .health import create_health_router
from .logging import setup_logging

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    bridge: Optional[SensorBridge] = None,
) -> FastAPI:
    """Build the app around one bridge instance."""
    settings = settings or default_settings
    bridge = bridge or SensorBridge(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings)
        logger.info(
            "Starting fitness bridge",
            version=__version__,
            environment=settings.environment,
        )
        await bridge.start()

        yield

        logger.info("Shutting down fitness bridge")
        try:
            await bridge.stop()
        except Exception as e:
            logger.error("Error during shutdown", error=str(e))

    app = FastAPI(
        title="Fitness Bridge",
        description="Motion classification, fall alerts and location relay for a fitness UI",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.bridge = bridge
    app.state.settings = settings

    @app.exception_handler(BridgeError)
    async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
        logger.warning(
            "Bridge call failed",
            path=request.url.path,
            code=exc.code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.code, "message": exc.message},
        )

    app.include_router(create_health_router(bridge.health, settings.service_name))
    app.include_router(accelerometer.router)
    app.include_router(gps.router)
    app.include_router(biometric.router)
    app.include_router(sensors.router)
    app.include_router(notifications.router)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root() -> dict:
        """Root endpoint with basic service information."""
        return {
            "service": settings.service_name,
            "version": __version__,
            "environment": settings.environment,
        }

    return app


app = create_app()


def main() -> None:
    uvicorn.run(
        "fitness_bridge.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
