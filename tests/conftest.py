"""Shared fixtures: provider payloads and snapshots."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from weather_now.schemas import DayForecast, WeatherSnapshot

FORECAST_START = date(2026, 10, 19)


def _make_response(payload: Any = None, status_code: int = 200) -> Mock:
    """A stand-in for ``requests.Response`` with ``json()`` and ``raise_for_status()``."""
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status = Mock()
    return resp


@pytest.fixture
def weather_payload() -> dict[str, Any]:
    """Open-Meteo forecast response for Berlin with a 7-day horizon."""
    days = [(FORECAST_START + timedelta(days=i)).isoformat() for i in range(7)]
    return {
        "latitude": 52.52,
        "longitude": 13.405,
        "timezone": "Europe/Berlin",
        "current_weather": {
            "time": "2026-10-19T14:00",
            "temperature": 12.3,
            "windspeed": 14.8,
            "weathercode": 3,
        },
        "hourly": {
            "time": ["2026-10-19T13:00", "2026-10-19T14:00", "2026-10-19T15:00"],
            "temperature_2m": [11.9, 12.3, 12.1],
            "relative_humidity_2m": [71, 68, 66],
            "apparent_temperature": [9.8, 10.4, 10.0],
            "precipitation_probability": [10, 5, 5],
            "weathercode": [2, 3, 3],
        },
        "daily": {
            "time": days,
            "temperature_2m_max": [14.2, 15.0, 13.1, 11.8, 12.5, 16.0, 17.4],
            "temperature_2m_min": [6.1, 7.3, 5.0, 4.2, 3.9, 6.8, 8.0],
            "precipitation_sum": [0.0, 2.4, None, 0.3, 0.0, 0.0, 5.25],
            "uv_index_max": [2.35, 2.1, 1.0, 0.9, 1.4, 2.8, 3.0],
            "weathercode": [3, 61, 45, 80, 0, 2, 95],
        },
    }


@pytest.fixture
def snapshot() -> WeatherSnapshot:
    """A normalized snapshot with two forecast days."""
    return WeatherSnapshot(
        observed_at=datetime(2026, 10, 19, 14, 0),
        current_temp_c=12.3,
        feels_like_c=10.4,
        humidity_pct=68,
        wind_speed_kmh=14.8,
        condition_code=3,
        forecast=(
            DayForecast(
                date=date(2026, 10, 19),
                max_temp_c=14.2,
                min_temp_c=6.1,
                condition_code=3,
                precipitation_mm=0.0,
                uv_index_max=2.3,
            ),
            DayForecast(
                date=date(2026, 10, 20),
                max_temp_c=15.0,
                min_temp_c=7.3,
                condition_code=61,
                precipitation_mm=None,
                uv_index_max=None,
            ),
        ),
        timezone="Europe/Berlin",
    )


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for fake HTTP responses: ``make_response(payload, status_code=200)``."""
    return _make_response
