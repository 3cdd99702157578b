"""Main FastAPI application for the curl logger service."""

import logging
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI

from .config import get_settings
from .errors import register_exception_handlers
from .middleware import CurlLoggingMiddleware
from .routes import echo_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=get_settings().log_format
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    logging.getLogger().setLevel(getattr(logging, settings.log_level))
    logger.info(f"Starting {settings.app_name}")
    if settings.curl_logging_enabled:
        logger.info(f"Curl request logging enabled, skipping paths: {settings.curl_skip_paths}")
    else:
        logger.info("Curl request logging disabled")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Logs incoming HTTP requests as replayable curl commands",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Capture first, so downstream middleware and routes read the replayed body
    if settings.curl_logging_enabled:
        app.add_middleware(CurlLoggingMiddleware, skip_paths=list(settings.curl_skip_paths))

    register_exception_handlers(app)

    app.include_router(echo_router)

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": settings.app_name
        }

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, str]:
        """Health check endpoint reporting capture configuration."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": "1.0.0",
            "curl_logging": "enabled" if settings.curl_logging_enabled else "disabled"
        }

    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "curl_logger.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
