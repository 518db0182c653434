"""Open-Meteo weather data source.

Fetches current conditions and the multi-day forecast from Open-Meteo
(free, no API key) and normalizes them into a ``WeatherSnapshot``.

Public API:
  - forecast: fetch (normalized snapshot), fetch_forecast (raw), parse_snapshot
  - client: API URL, requested variables
"""

from weather_now.datasources.weather.client import DAILY_VARS, HOURLY_VARS, OPEN_METEO_API
from weather_now.datasources.weather.forecast import fetch, fetch_forecast, parse_snapshot

__all__ = [
    "DAILY_VARS",
    "HOURLY_VARS",
    "OPEN_METEO_API",
    "fetch",
    "fetch_forecast",
    "parse_snapshot",
]
