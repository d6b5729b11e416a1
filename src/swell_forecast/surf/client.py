"""HTTP clients for the upstream marine data APIs."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from swell_forecast.config import (
    SWELL_CLOUD_API_URL, OPEN_METEO_MARINE_URL, USER_AGENT,
    REQUEST_TIMEOUT_SECONDS, OPEN_METEO_FORECAST_DAYS
)
from swell_forecast.surf.exceptions import (
    UpstreamParseError, UpstreamStatusError, UpstreamTransportError
)
from swell_forecast.surf.models import OpenMeteoResponse, PointData, SurfData
from swell_forecast.surf.utils import parse_coordinate

logger = logging.getLogger(__name__)

OPEN_METEO_MODEL = "open-meteo-marine"
OPEN_METEO_TIME_FORMAT = "%Y-%m-%dT%H:%M"


class MarineApiClient:
    """Base async client shared by the upstream marine APIs."""

    source_name = "marine API"

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the client.

        Args:
            base_url: Endpoint URL of the upstream API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport
        )

    async def _get_json(self, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Any:
        """Issue a GET request and decode its JSON body.

        Raises:
            UpstreamTransportError: On network failure or timeout
            UpstreamStatusError: If the status is not 200
            UpstreamParseError: If the body is not valid JSON
        """
        try:
            response = await self.client.get(self.base_url, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Request error to {self.source_name}: {e!r}")
            raise UpstreamTransportError(self.source_name, str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            # Header values must be ASCII
            logger.error(f"Could not build request to {self.source_name}: {e}")
            raise UpstreamTransportError(self.source_name, f"could not encode request: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.error(f"HTTP error from {self.source_name}: {response.status_code} - {response.text[:200]}")
            raise UpstreamStatusError(self.source_name, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.source_name}: {e}")
            raise UpstreamParseError(self.source_name, f"invalid JSON body: {e}") from e

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class SwellCloudClient(MarineApiClient):
    """Client for the keyed Swell Cloud point forecast API."""

    source_name = "Swell Cloud API"
    variables = "hs,tp,wndspd"

    def __init__(self, api_key: str, base_url: str = SWELL_CLOUD_API_URL, **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    async def get_surf_data(self, lat: str, lon: str) -> SurfData:
        """Fetch point forecast data for the given coordinates.

        Args:
            lat: Latitude as received in the query string
            lon: Longitude as received in the query string

        Returns:
            SurfData parsed from the response body

        Raises:
            UpstreamError: If the request or the body parse fails
        """
        params = {"lat": lat, "lon": lon, "units": "si", "variables": self.variables}
        logger.info(f"Fetching Swell Cloud forecast for lat={lat}, lon={lon}")

        data = await self._get_json(params, headers={"X-API-Key": self.api_key})

        try:
            surf_data = SurfData.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid Swell Cloud response format: {e}")
            raise UpstreamParseError(self.source_name, f"invalid response format: {e}") from e

        logger.info(f"Fetched {len(surf_data.data)} points from Swell Cloud (model={surf_data.model})")
        return surf_data


class OpenMeteoMarineClient(MarineApiClient):
    """Client for the free Open-Meteo Marine API."""

    source_name = "Open-Meteo Marine API"
    hourly_variables = ("wave_height", "wave_period", "wave_direction")

    def __init__(
        self,
        base_url: str = OPEN_METEO_MARINE_URL,
        forecast_days: int = OPEN_METEO_FORECAST_DAYS,
        **kwargs
    ):
        super().__init__(base_url, **kwargs)
        self.forecast_days = forecast_days

    async def get_marine_forecast(self, lat: str, lon: str) -> OpenMeteoResponse:
        """Fetch the raw hourly marine forecast.

        Raises:
            UpstreamError: If the request or the top level body parse fails
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(self.hourly_variables),
            "timezone": "auto",
            "forecast_days": self.forecast_days,
        }
        logger.info(f"Fetching Open-Meteo marine forecast for lat={lat}, lon={lon}")

        data = await self._get_json(params)

        try:
            return OpenMeteoResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid Open-Meteo response format: {e}")
            raise UpstreamParseError(self.source_name, f"invalid response format: {e}") from e

    async def get_surf_data(self, lat: str, lon: str) -> SurfData:
        """Fetch the hourly forecast and normalize it to SurfData."""
        response = await self.get_marine_forecast(lat, lon)
        try:
            surf_data = convert_open_meteo_to_surf_data(response, lat, lon)
        except ValidationError as e:
            logger.error(f"Open-Meteo conversion failed: {e}")
            raise UpstreamParseError(self.source_name, f"conversion failed: {e}") from e
        logger.info(f"Converted {len(surf_data.data)} Open-Meteo points")
        return surf_data


def _value_at(values: List[Optional[float]], index: int) -> float:
    # Short arrays and nulls count as 0.0
    if index < len(values) and values[index] is not None:
        return values[index]
    return 0.0


def convert_open_meteo_to_surf_data(response: OpenMeteoResponse, lat: str, lon: str) -> SurfData:
    """Convert an Open-Meteo hourly payload to canonical SurfData.

    Entries whose timestamp does not parse are skipped. Each point carries
    the queried coordinates rather than the provider's grid point.

    Args:
        response: Parsed Open-Meteo response
        lat: Latitude as received in the query string
        lon: Longitude as received in the query string

    Returns:
        SurfData with one point per parseable timestamp
    """
    hourly = response.hourly
    lat_value = parse_coordinate(lat)
    lon_value = parse_coordinate(lon)

    points = []
    for i, raw_time in enumerate(hourly.time):
        try:
            timestamp = datetime.strptime(raw_time, OPEN_METEO_TIME_FORMAT).replace(tzinfo=timezone.utc)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping Open-Meteo entry {i} with invalid time {raw_time!r}: {e}")
            continue

        points.append(PointData(
            time=timestamp,
            lat=lat_value,
            lon=lon_value,
            hs=_value_at(hourly.wave_height, i),
            tp=_value_at(hourly.wave_period, i),
            dp=_value_at(hourly.wave_direction, i),
        ))

    model_info = {
        "provider_timezone": response.timezone,
        "grid_latitude": response.latitude,
        "grid_longitude": response.longitude,
        "elevation": response.elevation,
    }
    return SurfData(data=points, model=OPEN_METEO_MODEL, model_info=model_info)
