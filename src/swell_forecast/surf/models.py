"""Data models for the swell forecast service."""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class PointData(BaseModel):
    """Single timestamped wave record in canonical form.

    Missing or null core values read as 0.0. Secondary swell, wind-wave
    and wind fields stay ``None`` unless an upstream supplies them.
    """
    time: datetime = Field(..., description="Timestamp of the record")
    lat: float = Field(0.0, description="Latitude in decimal degrees")
    lon: float = Field(0.0, description="Longitude in decimal degrees")
    hs: float = Field(0.0, ge=0, description="Significant wave height in meters")
    tp: float = Field(0.0, ge=0, description="Peak wave period in seconds")
    dp: float = Field(0.0, description="Dominant wave direction in degrees")
    ss_hs: Optional[float] = Field(None, description="Secondary swell height in meters")
    ss_dp: Optional[float] = Field(None, description="Secondary swell direction in degrees")
    ww_hs: Optional[float] = Field(None, description="Wind-wave height in meters")
    ww_dp: Optional[float] = Field(None, description="Wind-wave direction in degrees")
    wnddir: Optional[float] = Field(None, description="Wind direction in degrees")
    wndspd: Optional[float] = Field(None, description="Wind speed in m/s")

    @field_validator("time")
    @classmethod
    def ensure_aware(cls, value: datetime) -> datetime:
        # Upstream timestamps without an offset are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("lat", "lon", "hs", "tp", "dp", mode="before")
    @classmethod
    def null_as_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


class SurfData(BaseModel):
    """Point data plus metadata about the model that produced it."""
    data: List[PointData] = Field(default_factory=list, description="Ordered point records")
    model: str = Field("", description="Identifier of the producing source or model")
    model_info: Any = Field(None, description="Source specific model description")


class SurfForecast(BaseModel):
    """Forecast entry returned to callers."""
    time: datetime = Field(..., description="Local time in the target timezone")
    wave_height: float = Field(..., description="Significant wave height in meters")
    peak_wave_period: float = Field(..., description="Peak wave period in seconds")
    surf_level: str = Field(..., description="beginner, intermediate or advanced")


class SurfResponse(BaseModel):
    """Surf forecast response model."""
    forecast: List[SurfForecast] = Field(default_factory=list, description="Hourly surf forecast")


class SurfStatus(BaseModel):
    """Current surf conditions summary."""
    surf_level: Optional[str] = Field(None, description="Skill level of the current entry")
    color: str = Field(..., description="Traffic light color for the skill level")
    label: str = Field(..., description="Human readable conditions label")
    wave_height: Optional[float] = Field(None, description="Significant wave height in meters")
    peak_wave_period: Optional[float] = Field(None, description="Peak wave period in seconds")
    time: Optional[datetime] = Field(None, description="Local time of the entry")
    data_source: str = Field(..., description="Tier that supplied the data")


class OpenMeteoHourly(BaseModel):
    """Hourly block of the Open-Meteo Marine API response."""
    time: List[Optional[str]] = Field(default_factory=list, description="Timestamps as YYYY-MM-DDTHH:MM")
    wave_height: List[Optional[float]] = Field(default_factory=list)
    wave_period: List[Optional[float]] = Field(default_factory=list)
    wave_direction: List[Optional[float]] = Field(default_factory=list)


class OpenMeteoResponse(BaseModel):
    """Raw response from the Open-Meteo Marine API."""
    hourly: OpenMeteoHourly = Field(..., description="Hourly time series")
    latitude: Optional[float] = Field(None, description="Grid point latitude")
    longitude: Optional[float] = Field(None, description="Grid point longitude")
    timezone: Optional[str] = Field(None, description="Timezone detected by the provider")
    utc_offset_seconds: Optional[int] = Field(None)
    elevation: Optional[float] = Field(None)
    generationtime_ms: Optional[float] = Field(None)
