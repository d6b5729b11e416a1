"""Estimated surf data used when every upstream API fails."""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from swell_forecast.config import FALLBACK_HOURS
from swell_forecast.surf.models import PointData, SurfData
from swell_forecast.surf.utils import parse_coordinate

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "fallback-estimated"


def estimate_wave(hour_of_day: int, index: int) -> tuple[float, float, float]:
    """Estimate height, period and direction for one hour.

    Height follows a daily sine (tidal influence) plus a small ramp that
    repeats every six hours; period grows with height.

    Returns:
        Tuple of (wave_height, wave_period, wave_direction)
    """
    hour = float(hour_of_day)
    base_wave = 0.7 + 0.3 * math.sin((hour / 24.0) * 2 * math.pi)
    wave_height = base_wave + (index % 6) * 0.05
    wave_period = 7.0 + wave_height * 2.0
    wave_direction = 180.0 + 30.0 * math.sin((hour / 12.0) * math.pi)
    return wave_height, wave_period, wave_direction


def generate_fallback_data(
    lat: str,
    lon: str,
    now: Optional[datetime] = None,
    hours: int = FALLBACK_HOURS
) -> SurfData:
    """Generate hourly estimated surf data starting at ``now``.

    Args:
        lat: Latitude as received in the query string (unparseable -> 0.0)
        lon: Longitude as received in the query string (unparseable -> 0.0)
        now: Start time; defaults to the current local time
        hours: Number of hourly points to generate

    Returns:
        SurfData marked as estimated
    """
    start = now or datetime.now().astimezone()
    lat_value = parse_coordinate(lat)
    lon_value = parse_coordinate(lon)

    points = []
    for i in range(hours):
        timestamp = start + timedelta(hours=i)
        wave_height, wave_period, wave_direction = estimate_wave(timestamp.hour, i)
        points.append(PointData(
            time=timestamp,
            lat=lat_value,
            lon=lon_value,
            hs=wave_height,
            tp=wave_period,
            dp=wave_direction,
        ))

    logger.info(f"Generated {len(points)} estimated points for lat={lat_value}, lon={lon_value}")
    return SurfData(data=points, model=FALLBACK_MODEL, model_info={"estimated": True})
