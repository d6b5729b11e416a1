"""Surf service running the ordered data source fallback chain."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple

import httpx

from swell_forecast.config import Settings
from swell_forecast.surf.client import OpenMeteoMarineClient, SwellCloudClient
from swell_forecast.surf.exceptions import (
    FallbackGenerationError, MissingParameterError, UpstreamError
)
from swell_forecast.surf.fallback import generate_fallback_data
from swell_forecast.surf.forecast import build_response
from swell_forecast.surf.models import SurfData, SurfResponse
from swell_forecast.surf.sources import (
    FALLBACK_SOURCE, OPEN_METEO_SOURCE, SWELL_CLOUD_SOURCE, SourceResult
)

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str], Awaitable[SurfData]]


@dataclass
class ForecastResult:
    """Built forecast plus the tier that supplied it."""
    response: SurfResponse
    data_source: str
    model: str
    attempts: List[SourceResult] = field(default_factory=list)


def validate_coordinates(lat: Optional[str], lon: Optional[str]) -> Tuple[str, str]:
    """Ensure both coordinates were supplied.

    Raises:
        MissingParameterError: If either value is missing or empty
    """
    if not lat or not lon:
        raise MissingParameterError("lat and lon query parameters are required")
    return lat, lon


class SurfService:
    """Fetch surf data from the first source that can supply it."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize the surf service.

        Args:
            settings: Read-only service settings (API key, timezone, timeout)
            transport: Optional httpx transport for the upstream clients
            clock: Optional callable returning the start time for estimated data
        """
        self.settings = settings
        self.transport = transport
        self.clock = clock

    def upstream_sources(self) -> List[Tuple[str, Optional[Fetcher]]]:
        """Upstream sources in priority order; ``None`` marks a skipped source."""
        swell_cloud = self._fetch_swell_cloud if self.settings.has_api_key else None
        return [
            (SWELL_CLOUD_SOURCE, swell_cloud),
            (OPEN_METEO_SOURCE, self._fetch_open_meteo),
        ]

    async def get_forecast(self, lat: Optional[str], lon: Optional[str]) -> ForecastResult:
        """Build the forecast for a spot.

        Args:
            lat: Latitude query string
            lon: Longitude query string

        Returns:
            ForecastResult naming the source that supplied the data

        Raises:
            MissingParameterError: If lat or lon is missing
            FallbackGenerationError: If even the estimate produced nothing
        """
        lat, lon = validate_coordinates(lat, lon)

        attempts = []
        for source, fetch in self.upstream_sources():
            if fetch is None:
                logger.info(f"Skipping {source}: no API key configured")
                attempts.append(SourceResult.skipped(source, "no API key configured"))
                continue

            result = await self._attempt(source, fetch, lat, lon)
            attempts.append(result)
            if result.succeeded:
                return self._build(result, attempts)

        logger.warning(f"All APIs failed, using fallback estimated data for lat={lat}, lon={lon}")
        result = self._generate_fallback(lat, lon)
        attempts.append(result)
        return self._build(result, attempts)

    async def _attempt(self, source: str, fetch: Fetcher, lat: str, lon: str) -> SourceResult:
        logger.info(f"Attempting {source} for lat={lat}, lon={lon}")
        try:
            surf_data = await fetch(lat, lon)
        except UpstreamError as e:
            logger.warning(f"{source} failed for lat={lat}, lon={lon}: {e}")
            return SourceResult.failed(source, str(e))

        if not surf_data.data:
            logger.warning(f"{source} returned no data points for lat={lat}, lon={lon}")
            return SourceResult.empty(source)

        logger.info(f"Data from {source} ({len(surf_data.data)} points)")
        return SourceResult.success(source, surf_data)

    async def _fetch_swell_cloud(self, lat: str, lon: str) -> SurfData:
        async with SwellCloudClient(
            self.settings.api_key, timeout=self.settings.timeout, transport=self.transport
        ) as client:
            return await client.get_surf_data(lat, lon)

    async def _fetch_open_meteo(self, lat: str, lon: str) -> SurfData:
        async with OpenMeteoMarineClient(timeout=self.settings.timeout, transport=self.transport) as client:
            return await client.get_surf_data(lat, lon)

    def _generate_fallback(self, lat: str, lon: str) -> SourceResult:
        now = self.clock() if self.clock else None
        surf_data = generate_fallback_data(lat, lon, now=now)
        if not surf_data.data:
            raise FallbackGenerationError("Failed to generate any surf data")
        logger.info(f"Using {FALLBACK_SOURCE}")
        return SourceResult.success(FALLBACK_SOURCE, surf_data)

    def _build(self, result: SourceResult, attempts: List[SourceResult]) -> ForecastResult:
        response = build_response(result.data, self.settings.target_timezone)
        return ForecastResult(
            response=response,
            data_source=result.source,
            model=result.data.model,
            attempts=attempts,
        )
