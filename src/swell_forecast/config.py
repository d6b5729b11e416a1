"""Configuration settings for the swell forecast service."""

import logging
import os
from dataclasses import dataclass
from typing import Final

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Upstream APIs
SWELL_CLOUD_API_URL: Final[str] = "https://api.swellcloud.net/v1/point"
OPEN_METEO_MARINE_URL: Final[str] = "https://marine-api.open-meteo.com/v1/marine"
USER_AGENT: Final[str] = "SwellForecastService/0.1"

REQUEST_TIMEOUT_SECONDS: Final[float] = 15.0
OPEN_METEO_FORECAST_DAYS: Final[int] = 3
FALLBACK_HOURS: Final[int] = 24

# Forecast times are reported in this zone
TARGET_TIMEZONE: str = os.getenv("TARGET_TIMEZONE", "America/Sao_Paulo")

# Default spot (São Paulo)
DEFAULT_LAT: Final[float] = -23.5505
DEFAULT_LON: Final[float] = -46.6333

# API key file
PROPERTIES_FILE: str = os.getenv("PROPERTIES_FILE", "local.properties")

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8080"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Rate limiting configuration
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
RATE_LIMIT_REQUESTS_PER_SECOND: int = int(os.getenv("RATE_LIMIT_REQUESTS_PER_SECOND", "20"))
RATE_LIMIT_REDIS_KEY_PREFIX: str = os.getenv("RATE_LIMIT_REDIS_KEY_PREFIX", "swell_rate_limit")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Read-only settings handed to the surf service."""
    api_key: str = ""
    target_timezone: str = TARGET_TIMEZONE
    timeout: float = REQUEST_TIMEOUT_SECONDS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_api_key(path: str = PROPERTIES_FILE) -> str:
    """Read API_KEY from a key=value properties file.

    Args:
        path: Path to the properties file

    Returns:
        The API key, or an empty string when the file or key is missing
    """
    try:
        with open(path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError:
        logger.warning(f"Could not read {path}, will use free API fallback")
        return ""

    for line in lines:
        line = line.strip()
        if not line.startswith("API_KEY"):
            continue
        _, sep, value = line.partition("=")
        if sep and value.strip():
            return value.strip()

    logger.warning(f"API_KEY not found in {path}, will use free API fallback")
    return ""


def get_settings() -> Settings:
    """Build settings from the environment and the properties file."""
    api_key = os.getenv("API_KEY", "").strip() or load_api_key(PROPERTIES_FILE)
    return Settings(api_key=api_key)
