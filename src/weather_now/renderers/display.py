"""Display surface: the named slots the presenter and controller write to.

A surface holds already-formatted strings only. Text and HTML renderers read
it; nothing reads back from it into the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from weather_now.schemas import StatusKind

PLACEHOLDER = "—"


@dataclass
class ForecastTile:
    """One day of the forecast strip."""

    day: str
    icon: str
    temps: str
    label: str
    precipitation: str


@dataclass
class DisplaySurface:
    """Named slots for current conditions, forecast tiles and the status line."""

    place: str = ""
    temperature: str = ""
    condition: str = ""
    feels_like: str = ""
    humidity: str = ""
    wind: str = ""
    updated: str = ""
    uv: str = ""
    forecast: list[ForecastTile] = field(default_factory=list)
    status: str = ""
    status_kind: StatusKind = StatusKind.NEUTRAL

    @property
    def has_weather(self) -> bool:
        """Whether a snapshot has been rendered onto this surface."""
        return bool(self.temperature)

    def set_status(self, message: str, kind: StatusKind = StatusKind.NEUTRAL) -> None:
        self.status = message
        self.status_kind = kind
