"""
Shared pytest fixtures for swell forecast tests.

Environment is set before any swell_forecast import so the app is built
without rate limiting and without reading a real properties file.
"""

import os
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["API_KEY"] = ""
os.environ["PROPERTIES_FILE"] = os.path.join(os.path.dirname(__file__), "missing.properties")
os.environ["TARGET_TIMEZONE"] = "America/Sao_Paulo"

from swell_forecast.api.endpoints import get_surf_service  # noqa: E402
from swell_forecast.config import Settings  # noqa: E402
from swell_forecast.main import app  # noqa: E402
from swell_forecast.surf.service import SurfService  # noqa: E402

SWELL_CLOUD_HOST = "api.swellcloud.net"
OPEN_METEO_HOST = "marine-api.open-meteo.com"

FIXED_NOW = datetime(2024, 1, 15, 6, 0, tzinfo=timezone.utc)

SWELL_CLOUD_BODY = {
    "data": [
        {"time": "2024-01-15T12:00:00Z", "lat": -23.55, "lon": -46.63,
         "hs": 0.8, "tp": 7.5, "dp": 120.0, "wndspd": 4.2},
        {"time": "2024-01-15T13:00:00Z", "lat": -23.55, "lon": -46.63,
         "hs": 1.6, "tp": 11.0, "dp": 125.0, "ss_hs": 0.4, "ss_dp": 200.0},
    ],
    "model": "gfs-wave",
    "model_info": {"run": "2024011506"},
}

OPEN_METEO_BODY = {
    "latitude": -23.5,
    "longitude": -46.625,
    "timezone": "America/Sao_Paulo",
    "elevation": 0.0,
    "hourly": {
        "time": ["2024-01-15T00:00", "not-a-time", "2024-01-15T02:00"],
        "wave_height": [1.2, 1.3, None],
        "wave_period": [9.0, 9.5],
        "wave_direction": [140.0, 141.0, 142.0],
    },
}


class UpstreamStub:
    """httpx.MockTransport handler answering per upstream host.

    Each outcome is either an httpx.Response or an httpx.RequestError
    subclass, which is raised with the request attached.
    """

    def __init__(self, **outcomes):
        self.outcomes = {
            SWELL_CLOUD_HOST: outcomes.get("swell_cloud", httpx.ConnectError),
            OPEN_METEO_HOST: outcomes.get("open_meteo", httpx.ConnectError),
        }
        self.requests = []

    @property
    def hosts(self):
        return [request.url.host for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[request.url.host]
        if isinstance(outcome, type) and issubclass(outcome, httpx.RequestError):
            raise outcome("upstream unreachable", request=request)
        return outcome


def make_service(stub: UpstreamStub, api_key: str = "") -> SurfService:
    return SurfService(
        Settings(api_key=api_key),
        transport=httpx.MockTransport(stub),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client_for():
    """Build a TestClient whose surf service talks to the given stub."""

    def _client(stub: UpstreamStub, api_key: str = "") -> TestClient:
        app.dependency_overrides[get_surf_service] = lambda: make_service(stub, api_key)
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
