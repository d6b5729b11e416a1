"""Build the caller facing forecast from canonical surf data."""

import logging
import zoneinfo
from datetime import timezone, tzinfo
from typing import Optional

from swell_forecast.config import TARGET_TIMEZONE
from swell_forecast.surf.models import SurfData, SurfForecast, SurfResponse, SurfStatus

logger = logging.getLogger(__name__)

BEGINNER = "beginner"
INTERMEDIATE = "intermediate"
ADVANCED = "advanced"

LEVEL_COLORS = {
    BEGINNER: "green",
    INTERMEDIATE: "yellow",
    ADVANCED: "red",
}

COLOR_LABELS = {
    "green": "Good (Beginner)",
    "yellow": "Moderate (Intermediate)",
    "red": "Challenging (Advanced)",
    "gray": "Unknown",
}


def skill_level(hs: float, tp: float) -> str:
    """Classify conditions by wave height (m) and peak period (s). Bounds are inclusive."""
    if hs <= 1.0 and tp <= 8:
        return BEGINNER
    if hs <= 1.8 and tp <= 12:
        return INTERMEDIATE
    return ADVANCED


def resolve_timezone(name: str = TARGET_TIMEZONE) -> tzinfo:
    """Load the target timezone, falling back to UTC when it is unavailable."""
    try:
        return zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Could not load timezone {name!r}, using UTC: {e}")
        return timezone.utc


def build_response(surf_data: SurfData, timezone_name: str = TARGET_TIMEZONE) -> SurfResponse:
    """Convert every point to a forecast entry in the target timezone.

    Args:
        surf_data: Canonical data from any source
        timezone_name: Zone the forecast times are reported in

    Returns:
        SurfResponse with one entry per point, in input order
    """
    tz = resolve_timezone(timezone_name)

    forecast = [
        SurfForecast(
            time=point.time.astimezone(tz),
            wave_height=point.hs,
            peak_wave_period=point.tp,
            surf_level=skill_level(point.hs, point.tp),
        )
        for point in surf_data.data
    ]
    return SurfResponse(forecast=forecast)


def color_for_level(level: Optional[str]) -> str:
    return LEVEL_COLORS.get(level, "gray")


def summarize_current(response: SurfResponse, data_source: str) -> SurfStatus:
    """Summarize the first forecast entry as the current conditions."""
    if not response.forecast:
        return SurfStatus(color="gray", label=COLOR_LABELS["gray"], data_source=data_source)

    current = response.forecast[0]
    color = color_for_level(current.surf_level)
    return SurfStatus(
        surf_level=current.surf_level,
        color=color,
        label=COLOR_LABELS[color],
        wave_height=current.wave_height,
        peak_wave_period=current.peak_wave_period,
        time=current.time,
        data_source=data_source,
    )
