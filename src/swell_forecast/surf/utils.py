"""Small helpers shared by the surf data sources."""

import logging

logger = logging.getLogger(__name__)


def parse_coordinate(value: str) -> float:
    """Parse a coordinate query string, yielding 0.0 when it is not a number."""
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Could not parse coordinate {value!r}, using 0.0")
        return 0.0
