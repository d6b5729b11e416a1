"""Main FastAPI application for the swell forecast service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swell_forecast.api.endpoints import get_app_settings, router as surf_router
from swell_forecast.config import HOST, PORT, DEBUG, RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS_PER_SECOND
from swell_forecast.logging_config import configure_logging
from swell_forecast.middleware.rate_limit import RateLimitMiddleware

configure_logging(logging.DEBUG if DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_app_settings()
    logger.info("Starting Swell Forecast Service")
    logger.info("Data sources available:")
    if settings.has_api_key:
        logger.info("  1. Swell Cloud API (with API key)")
    logger.info("  2. Open-Meteo Marine API (free)")
    logger.info("  3. Fallback estimated data (always available)")
    try:
        yield
    finally:
        logger.info("Shutting down Swell Forecast Service")


def create_app(rate_limit_enabled: bool = RATE_LIMIT_ENABLED) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        rate_limit_enabled: Whether the global rate limit is enforced

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Swell Forecast Service",
        description="Surf forecasts from Swell Cloud, Open-Meteo Marine or estimated data",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Data-Source"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        calls=RATE_LIMIT_REQUESTS_PER_SECOND,
        enabled=rate_limit_enabled
    )

    app.include_router(surf_router)

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Running server on {HOST}:{PORT}")
    uvicorn.run(
        "swell_forecast.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info"
    )


if __name__ == "__main__":
    main()
