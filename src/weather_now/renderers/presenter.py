"""Snapshot -> display slots.

``render`` recomputes every weather slot from (snapshot, place, unit), so it
can be called again with a different unit without touching the network.
The status line is left alone; the session controller owns it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_now.renderers import conditions
from weather_now.renderers.display import PLACEHOLDER, DisplaySurface, ForecastTile
from weather_now.renderers.units import format_temperature, format_wind, round_half_up

if TYPE_CHECKING:
    from datetime import date, datetime

    from weather_now.schemas import DayForecast, DisplayUnit, WeatherSnapshot


def format_day(day: date) -> str:
    """Short forecast label, e.g. ``Mon, 06 Jan``."""
    return day.strftime("%a, %d %b")


def format_observed(observed_at: datetime) -> str:
    """Observation time in the location's local time, e.g. ``06 Jan, 14:00``."""
    return observed_at.strftime("%d %b, %H:%M")


def format_precipitation(precipitation_mm: float | None) -> str:
    if precipitation_mm is None:
        return "0 mm"
    return f"{precipitation_mm:.1f} mm"


def format_humidity(humidity_pct: float | None) -> str:
    if humidity_pct is None:
        return PLACEHOLDER
    return f"{round_half_up(humidity_pct)}%"


def format_uv(uv_index: float | None) -> str:
    if uv_index is None:
        return PLACEHOLDER
    return f"{uv_index:.1f}"


def build_forecast_tiles(days: tuple[DayForecast, ...], unit: DisplayUnit) -> list[ForecastTile]:
    """One tile per forecast day, in the snapshot's (chronological) order."""
    tiles = []
    for day in days:
        condition = conditions.resolve(day.condition_code)
        tiles.append(
            ForecastTile(
                day=format_day(day.date),
                icon=condition.icon,
                temps=(
                    f"{format_temperature(day.max_temp_c, unit)} / "
                    f"{format_temperature(day.min_temp_c, unit)}"
                ),
                label=condition.label,
                precipitation=format_precipitation(day.precipitation_mm),
            )
        )
    return tiles


def render(
    snapshot: WeatherSnapshot,
    place: str | None,
    unit: DisplayUnit,
    surface: DisplaySurface,
) -> DisplaySurface:
    """Write every weather slot of ``surface`` from scratch and return it."""
    feels_like_c = snapshot.feels_like_c
    if feels_like_c is None:
        feels_like_c = snapshot.current_temp_c
    uv_index = snapshot.forecast[0].uv_index_max if snapshot.forecast else None

    surface.place = place or ""
    surface.temperature = format_temperature(snapshot.current_temp_c, unit)
    surface.condition = conditions.describe(snapshot.condition_code)
    surface.feels_like = format_temperature(feels_like_c, unit)
    surface.humidity = format_humidity(snapshot.humidity_pct)
    surface.wind = format_wind(snapshot.wind_speed_kmh, unit)
    surface.uv = format_uv(uv_index)
    surface.updated = format_observed(snapshot.observed_at)
    surface.forecast = build_forecast_tiles(snapshot.forecast, unit)
    return surface
