"""API endpoints for the swell forecast service."""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from swell_forecast.config import DEFAULT_LAT, DEFAULT_LON, Settings, get_settings
from swell_forecast.surf.exceptions import FallbackGenerationError, MissingParameterError
from swell_forecast.surf.forecast import summarize_current
from swell_forecast.surf.models import SurfResponse, SurfStatus
from swell_forecast.surf.service import ForecastResult, SurfService
from swell_forecast.surf.sources import FALLBACK_SOURCE, OPEN_METEO_SOURCE, SWELL_CLOUD_SOURCE

logger = logging.getLogger(__name__)

DATA_SOURCE_HEADER = "X-Data-Source"

router = APIRouter()


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    """Settings are loaded once per process."""
    settings = get_settings()
    if settings.has_api_key:
        logger.info("API key loaded - will try Swell Cloud API first")
    else:
        logger.info("No API key - will use free Open-Meteo API or fallback data")
    return settings


def get_surf_service(settings: Settings = Depends(get_app_settings)) -> SurfService:
    """Dependency to get a surf service instance."""
    return SurfService(settings)


async def _run_forecast(
    service: SurfService,
    lat: Optional[str],
    lon: Optional[str]
) -> tuple[Optional[ForecastResult], Optional[Response]]:
    """Run the fallback chain, mapping errors to plain text responses."""
    try:
        return await service.get_forecast(lat, lon), None
    except MissingParameterError as e:
        logger.warning(f"Rejected request with lat={lat!r}, lon={lon!r}: {e}")
        return None, PlainTextResponse(str(e), status_code=400)
    except FallbackGenerationError as e:
        logger.error(f"Fallback generation failed for lat={lat}, lon={lon}: {e}")
        return None, PlainTextResponse(str(e), status_code=500)


@router.get(
    "/swell",
    response_model=SurfResponse,
    tags=["surf"],
    responses={400: {"description": "lat or lon missing"}},
)
async def get_swell_forecast(
    response: Response,
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lon: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    service: SurfService = Depends(get_surf_service)
):
    """Get the hourly surf forecast for a spot.

    The ``X-Data-Source`` header names the tier that supplied the data.
    """
    result, error = await _run_forecast(service, lat, lon)
    if error is not None:
        return error

    response.headers[DATA_SOURCE_HEADER] = result.data_source
    logger.info(f"Returning {len(result.response.forecast)} entries from {result.data_source}")
    return result.response


@router.get("/swell/status", response_model=SurfStatus, tags=["surf"])
async def get_swell_status(
    response: Response,
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lon: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    service: SurfService = Depends(get_surf_service)
):
    """Get the current surf conditions as a traffic light summary."""
    result, error = await _run_forecast(service, lat, lon)
    if error is not None:
        return error

    response.headers[DATA_SOURCE_HEADER] = result.data_source
    return summarize_current(result.response, result.data_source)


@router.get("/health", tags=["system"])
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": "swell-forecast"}


@router.get("/info", tags=["system"])
async def get_service_info(settings: Settings = Depends(get_app_settings)) -> dict:
    """Get service information.

    Returns:
        Service information including the data sources in priority order
    """
    return {
        "service": "Swell Forecast Service",
        "version": "0.1.0",
        "timezone": settings.target_timezone,
        "default_location": {
            "latitude": DEFAULT_LAT,
            "longitude": DEFAULT_LON,
        },
        "data_sources": [
            {"name": SWELL_CLOUD_SOURCE, "enabled": settings.has_api_key},
            {"name": OPEN_METEO_SOURCE, "enabled": True},
            {"name": FALLBACK_SOURCE, "enabled": True},
        ],
    }
