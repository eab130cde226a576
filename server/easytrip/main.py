"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import Database
from .core.exceptions import register_exception_handlers
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_NAME,
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_structured_logging,
    setup_tracing,
)
from .routers import auth, flights, health, hotels, metrics, trains

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database handle on startup and disposes it on shutdown. Outside
    production an unreachable database is logged and the API keeps serving
    with a degraded health status.
    """
    logger.info("Starting EasyTrip API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    setup_tracing(SERVICE_NAME)

    database = Database(settings.database_url)
    app.state.database = database
    instrument_sqlalchemy(database.engine)

    try:
        await database.connect()
        logger.info("Database initialized successfully")
    except Exception as e:
        if settings.is_production:
            logger.error(f"Failed to initialize database: {e}")
            await database.dispose()
            raise
        logger.warning(f"Database unavailable, continuing in degraded mode: {e}")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down EasyTrip API")

    try:
        await database.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error during application cleanup: {e}")

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="EasyTrip API",
        description="Search and create hotels, flights and trains; sign up and log in",
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Setup custom middleware
    setup_middleware(app, enable_logging=True)

    # Instrument FastAPI with OpenTelemetry
    instrument_fastapi(app)

    # Register exception handlers
    register_exception_handlers(app)

    # Register API routers
    app.include_router(health.router)
    app.include_router(hotels.router)
    app.include_router(flights.router)
    app.include_router(trains.router)
    app.include_router(auth.router)
    app.include_router(metrics.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run(
        "easytrip.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
