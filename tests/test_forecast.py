"""Tests for skill classification and forecast building."""

from datetime import datetime, timedelta, timezone

import pytest

from swell_forecast.surf.forecast import (
    build_response, resolve_timezone, skill_level, summarize_current
)
from swell_forecast.surf.models import PointData, SurfData, SurfResponse


@pytest.mark.parametrize("hs, tp, expected", [
    (0.5, 6, "beginner"),
    (1.0, 8, "beginner"),
    (1.0, 8.1, "intermediate"),
    (1.5, 10, "intermediate"),
    (1.8, 12, "intermediate"),
    (0.5, 12.5, "advanced"),
    (1.81, 9, "advanced"),
    (2.5, 14, "advanced"),
])
def test_skill_level(hs, tp, expected):
    assert skill_level(hs, tp) == expected


def _point(time, hs, tp):
    return PointData(time=time, lat=-23.55, lon=-46.63, hs=hs, tp=tp, dp=90.0)


def test_build_response_converts_to_sao_paulo_and_keeps_order():
    start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    data = SurfData(
        data=[_point(start, 2.5, 14), _point(start + timedelta(hours=1), 0.5, 6)],
        model="test",
    )

    response = build_response(data)

    assert [f.surf_level for f in response.forecast] == ["advanced", "beginner"]
    first = response.forecast[0]
    assert first.time.utcoffset() == timedelta(hours=-3)
    assert first.time.hour == 9
    assert first.time == start
    assert first.wave_height == 2.5
    assert first.peak_wave_period == 14


def test_build_response_serializes_offset():
    start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    response = build_response(SurfData(data=[_point(start, 0.5, 6)]))

    payload = response.model_dump(mode="json")

    assert payload["forecast"][0]["time"] == "2024-01-15T09:00:00-03:00"
    assert set(payload["forecast"][0]) == {"time", "wave_height", "peak_wave_period", "surf_level"}


def test_build_response_empty_input():
    assert build_response(SurfData()).forecast == []


def test_unknown_timezone_falls_back_to_utc():
    assert resolve_timezone("Not/AZone") == timezone.utc

    start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    response = build_response(SurfData(data=[_point(start, 0.5, 6)]), "Not/AZone")
    assert response.forecast[0].time.utcoffset() == timedelta(0)


def test_naive_upstream_time_is_utc():
    point = _point(datetime(2024, 1, 15, 12, 0), 0.5, 6)
    assert point.time.tzinfo == timezone.utc


def test_summarize_current_uses_first_entry():
    start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    response = build_response(SurfData(data=[_point(start, 1.5, 10), _point(start, 0.5, 6)]))

    status = summarize_current(response, "Swell Cloud API")

    assert status.surf_level == "intermediate"
    assert status.color == "yellow"
    assert status.label == "Moderate (Intermediate)"
    assert status.wave_height == 1.5
    assert status.data_source == "Swell Cloud API"


def test_summarize_current_without_entries():
    status = summarize_current(SurfResponse(), "Fallback Estimated Data")

    assert status.color == "gray"
    assert status.label == "Unknown"
    assert status.surf_level is None
