"""Current conditions and multi-day forecast from the Open-Meteo Forecast API."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any

import requests

from weather_now.datasources.weather.client import (
    DAILY_VARS,
    DEFAULT_FORECAST_DAYS,
    HOURLY_VARS,
    OPEN_METEO_API,
)
from weather_now.exceptions import WeatherRequestFailed
from weather_now.schemas import Coordinate, DayForecast, WeatherSnapshot
from weather_now.services.http import session

logger = logging.getLogger(__name__)


def _coerce_float(value: Any, *, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise WeatherRequestFailed(f"Invalid numeric value for {field_name}") from exc
    if not math.isfinite(number):
        raise WeatherRequestFailed(f"Non-finite value for {field_name}")
    return number


def _coerce_optional_float(value: Any, *, field_name: str) -> float | None:
    if value is None:
        return None
    return _coerce_float(value, field_name=field_name)


def _coerce_int(value: Any, *, field_name: str) -> int:
    # Whole floats like 3.0 are fine; 3.7 or inf is not a code.
    if isinstance(value, float) and not value.is_integer():
        raise WeatherRequestFailed(f"Invalid integer value for {field_name}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise WeatherRequestFailed(f"Invalid integer value for {field_name}") from exc


def fetch_forecast(
    coord: Coordinate,
    *,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> dict[str, Any]:
    """
    Fetch current conditions, hourly and daily series in one request.

    Args:
        coord: Location to forecast.
        forecast_days: Forecast horizon in days (provider default is 7).

    Returns:
        Raw API response dict with ``current_weather``, ``hourly`` and ``daily`` keys.

    Raises:
        WeatherRequestFailed: on transport errors, non-2xx status or a non-JSON body.
    """
    params: dict[str, str | int | float] = {
        "latitude": coord.latitude,
        "longitude": coord.longitude,
        "current_weather": "true",
        "hourly": ",".join(HOURLY_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": "auto",
        "forecast_days": forecast_days,
    }
    try:
        resp = session.get(OPEN_METEO_API, params=params)
        resp.raise_for_status()
        result: Any = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise WeatherRequestFailed("Weather request failed") from exc

    if not isinstance(result, dict):
        raise WeatherRequestFailed("Unexpected Open-Meteo response shape")
    return result


def _match_hourly(
    hourly: Any, current_time: str, current_temp_c: float
) -> tuple[float, float | None]:
    """
    Read feels-like and humidity at the hour matching the current observation.

    Only an exact timestamp match counts. Without one, feels-like falls back
    to the current temperature and humidity is unavailable.
    """
    if not isinstance(hourly, dict):
        return current_temp_c, None
    times = hourly.get("time")
    if not isinstance(times, list) or current_time not in times:
        return current_temp_c, None
    index = times.index(current_time)

    def _at(key: str) -> float | None:
        series = hourly.get(key)
        if not isinstance(series, list) or index >= len(series):
            return None
        return _coerce_optional_float(series[index], field_name=f"hourly.{key}")

    feels_like = _at("apparent_temperature")
    humidity = _at("relative_humidity_2m")
    return (feels_like if feels_like is not None else current_temp_c), humidity


def _parse_daily(daily: Any) -> tuple[DayForecast, ...]:
    """
    Zip the daily arrays into forecast days, by position.

    The required arrays must have the same length; a mismatch means the
    index alignment can't be trusted, so the response is rejected.
    """
    if not isinstance(daily, dict):
        raise WeatherRequestFailed("Open-Meteo response did not include daily data")

    required = {
        key: daily.get(key)
        for key in ("time", "temperature_2m_max", "temperature_2m_min", "weathercode")
    }
    missing = [key for key, values in required.items() if not isinstance(values, list)]
    if missing:
        raise WeatherRequestFailed(f"Open-Meteo daily payload missing {', '.join(missing)}")

    count = len(required["time"])
    optional: dict[str, list[Any]] = {}
    for key in ("precipitation_sum", "uv_index_max"):
        values = daily.get(key)
        optional[key] = values if isinstance(values, list) else [None] * count

    lengths = {key: len(values) for key, values in {**required, **optional}.items()}
    if len(set(lengths.values())) > 1:
        logger.warning("Open-Meteo daily arrays are misaligned: %s", lengths)
        raise WeatherRequestFailed("Open-Meteo daily arrays have different lengths")

    days = []
    for i in range(count):
        try:
            day = date.fromisoformat(str(required["time"][i]))
        except ValueError as exc:
            raise WeatherRequestFailed("Open-Meteo daily date was invalid") from exc
        days.append(
            DayForecast(
                date=day,
                max_temp_c=_coerce_float(
                    required["temperature_2m_max"][i], field_name="daily.temperature_2m_max"
                ),
                min_temp_c=_coerce_float(
                    required["temperature_2m_min"][i], field_name="daily.temperature_2m_min"
                ),
                condition_code=_coerce_int(
                    required["weathercode"][i], field_name="daily.weathercode"
                ),
                precipitation_mm=_coerce_optional_float(
                    optional["precipitation_sum"][i], field_name="daily.precipitation_sum"
                ),
                uv_index_max=_coerce_optional_float(
                    optional["uv_index_max"][i], field_name="daily.uv_index_max"
                ),
            )
        )
    return tuple(days)


def parse_snapshot(payload: dict[str, Any]) -> WeatherSnapshot:
    """Normalize a raw forecast response into a ``WeatherSnapshot``."""
    current = payload.get("current_weather")
    if not isinstance(current, dict):
        raise WeatherRequestFailed("Open-Meteo response did not include current_weather")

    current_time = current.get("time")
    try:
        observed_at = datetime.fromisoformat(str(current_time))
    except ValueError as exc:
        raise WeatherRequestFailed("Open-Meteo current_weather.time was invalid") from exc

    temperature = _coerce_float(current.get("temperature"), field_name="current_weather.temperature")
    feels_like, humidity = _match_hourly(payload.get("hourly"), str(current_time), temperature)
    timezone = payload.get("timezone")

    return WeatherSnapshot(
        observed_at=observed_at,
        current_temp_c=temperature,
        feels_like_c=feels_like,
        humidity_pct=humidity,
        wind_speed_kmh=_coerce_float(
            current.get("windspeed"), field_name="current_weather.windspeed"
        ),
        condition_code=_coerce_int(
            current.get("weathercode"), field_name="current_weather.weathercode"
        ),
        forecast=_parse_daily(payload.get("daily")),
        timezone=timezone if isinstance(timezone, str) else None,
    )


def fetch(coord: Coordinate, *, forecast_days: int = DEFAULT_FORECAST_DAYS) -> WeatherSnapshot:
    """
    Fetch and normalize weather for a coordinate.

    Raises:
        WeatherRequestFailed: on transport or status errors, or a malformed payload.
    """
    snapshot = parse_snapshot(fetch_forecast(coord, forecast_days=forecast_days))
    logger.debug(
        "Weather for %s: %.1f°C, code %d, %d forecast days",
        coord.fallback_name(),
        snapshot.current_temp_c,
        snapshot.condition_code,
        len(snapshot.forecast),
    )
    return snapshot
