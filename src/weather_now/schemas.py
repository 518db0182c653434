"""
Domain models for weather-now.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - datasources normalize API responses to these.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Location
# =============================================================================


class Coordinate(BaseModel):
    """Geographic point. Immutable once obtained."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def fallback_name(self) -> str:
        """Display name used when no locality can be resolved."""
        return f"{self.latitude:.3f}, {self.longitude:.3f}"


class PlaceMatch(BaseModel):
    """Best-ranked result of a free-text place search."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    coordinate: Coordinate
    place_name: str = Field(..., min_length=1)


# =============================================================================
# Weather
# =============================================================================


class DayForecast(BaseModel):
    """Single day of the multi-day forecast. Temperatures in Celsius."""

    model_config = ConfigDict(frozen=True)

    date: date
    max_temp_c: float
    min_temp_c: float
    condition_code: int
    precipitation_mm: float | None = None
    uv_index_max: float | None = None


class WeatherSnapshot(BaseModel):
    """Current conditions plus forecast, built from one provider response."""

    model_config = ConfigDict(frozen=True)

    observed_at: datetime
    current_temp_c: float
    feels_like_c: float | None = None
    humidity_pct: float | None = None
    wind_speed_kmh: float
    condition_code: int
    forecast: tuple[DayForecast, ...] = ()
    timezone: str | None = None


# =============================================================================
# Session
# =============================================================================


class DisplayUnit(StrEnum):
    """Unit system used for display. Snapshots always hold metric values."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class StatusKind(StrEnum):
    """Styling hint for the status line."""

    OK = "ok"
    WARN = "warn"
    BAD = "bad"
    NEUTRAL = "neutral"


class PipelineState(StrEnum):
    """Stages of the location -> weather -> display pipeline."""

    IDLE = "idle"
    LOCATING = "locating"
    REVERSE_GEOCODING = "reverse_geocoding"
    SEARCHING = "searching"
    FETCHING_WEATHER = "fetching_weather"
    RENDERED = "rendered"


class Session(BaseModel):
    """Interactive session state, owned and mutated by the session controller."""

    model_config = ConfigDict(validate_assignment=True)

    unit: DisplayUnit = DisplayUnit.METRIC
    last_snapshot: WeatherSnapshot | None = None
    last_place: str | None = None
    state: PipelineState = PipelineState.IDLE
    status_message: str = ""
    status_kind: StatusKind = StatusKind.NEUTRAL
