"""Display surface -> standalone HTML page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_now.renderers import render_template

if TYPE_CHECKING:
    from weather_now.renderers.display import DisplaySurface
    from weather_now.schemas import DisplayUnit


def build_forecast_html(surface: DisplaySurface) -> str:
    """Build the forecast strip fragment. Empty when there is nothing to show."""
    if not surface.forecast:
        return ""
    return render_template("forecast.html.j2", tiles=surface.forecast)


def build_page_html(surface: DisplaySurface, unit: DisplayUnit, title: str = "Weather") -> str:
    """Build the full page: current conditions, forecast strip and status line."""
    return render_template(
        "base.html.j2",
        title=title,
        unit=unit.value,
        surface=surface,
        forecast_html=build_forecast_html(surface),
    )
