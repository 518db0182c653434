"""Display surface -> plain terminal text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_now.schemas import StatusKind

if TYPE_CHECKING:
    from weather_now.renderers.display import DisplaySurface

STATUS_MARKERS = {
    StatusKind.OK: "[ok]",
    StatusKind.WARN: "[!]",
    StatusKind.BAD: "[x]",
    StatusKind.NEUTRAL: "[..]",
}


def render_text(surface: DisplaySurface) -> str:
    """Render current conditions, the forecast strip and the status line.

    Before the first snapshot only the status line is shown.
    """
    lines: list[str] = []
    if surface.has_weather:
        header = f"Weather • {surface.place}" if surface.place else "Weather"
        lines.append(header)
        lines.append(f"  {surface.temperature}  {surface.condition}")
        lines.append(f"  Feels like {surface.feels_like}   Humidity {surface.humidity}")
        lines.append(f"  Wind {surface.wind}   UV {surface.uv}")
        lines.append(f"  Updated {surface.updated}")
        if surface.forecast:
            lines.append("")
            width = max(len(tile.day) for tile in surface.forecast)
            for tile in surface.forecast:
                lines.append(
                    f"  {tile.day:<{width}}  {tile.icon}  {tile.temps:<13} "
                    f"{tile.label:<20} 💧 {tile.precipitation}"
                )
        lines.append("")
    if surface.status:
        lines.append(f"{STATUS_MARKERS[surface.status_kind]} {surface.status}")
    return "\n".join(lines)
