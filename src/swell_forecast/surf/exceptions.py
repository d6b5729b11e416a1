"""Exceptions raised by the surf forecast components."""

from typing import Optional


class SurfForecastError(Exception):
    """Base class for surf forecast errors."""
    pass


class MissingParameterError(SurfForecastError):
    """Raised when a required query parameter is missing or empty."""
    pass


class UpstreamError(SurfForecastError):
    """Raised when an upstream data source cannot supply data."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class UpstreamTransportError(UpstreamError):
    """Network failure or timeout talking to an upstream."""
    pass


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-200 status."""

    def __init__(self, source: str, status_code: int, body: Optional[str] = None):
        super().__init__(source, f"returned status {status_code}")
        self.status_code = status_code
        self.body = body


class UpstreamParseError(UpstreamError):
    """Upstream body could not be parsed."""
    pass


class FallbackGenerationError(SurfForecastError):
    """Raised when the estimated data generator produces nothing."""
    pass
