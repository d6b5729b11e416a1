"""Tagged results for the ordered surf data sources."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from swell_forecast.surf.models import SurfData

SWELL_CLOUD_SOURCE = "Swell Cloud API"
OPEN_METEO_SOURCE = "Open-Meteo Marine API (free)"
FALLBACK_SOURCE = "Fallback Estimated Data"

# Priority order, highest first
SOURCE_PRIORITY = (SWELL_CLOUD_SOURCE, OPEN_METEO_SOURCE, FALLBACK_SOURCE)


class SourceStatus(str, Enum):
    """Outcome of one attempt against a data source."""
    SKIPPED = "skipped"
    FAILED = "failed"
    EMPTY = "empty"
    SUCCESS = "success"


@dataclass(frozen=True)
class SourceResult:
    """Result of trying a single source."""
    source: str
    status: SourceStatus
    data: Optional[SurfData] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, source: str, data: SurfData) -> "SourceResult":
        return cls(source, SourceStatus.SUCCESS, data=data)

    @classmethod
    def failed(cls, source: str, reason: str) -> "SourceResult":
        return cls(source, SourceStatus.FAILED, reason=reason)

    @classmethod
    def empty(cls, source: str) -> "SourceResult":
        return cls(source, SourceStatus.EMPTY, reason="no data points")

    @classmethod
    def skipped(cls, source: str, reason: str) -> "SourceResult":
        return cls(source, SourceStatus.SKIPPED, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.status is SourceStatus.SUCCESS and self.data is not None and bool(self.data.data)
