"""Unit conversion and formatting for display.

Pure conversion functions with no external dependencies. Snapshots always
carry metric values; conversion happens only here, at display time.
"""

from __future__ import annotations

import math

from weather_now.schemas import DisplayUnit

KMH_PER_MPH = 1.60934


def to_fahrenheit(celsius: float) -> float:
    """Convert Celsius to Fahrenheit."""
    return celsius * 9 / 5 + 32


def to_mph(kmh: float) -> float:
    """Convert km/h to mph."""
    return kmh / KMH_PER_MPH


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def toggle_unit(unit: DisplayUnit) -> DisplayUnit:
    """Return the other display unit."""
    return DisplayUnit.IMPERIAL if unit is DisplayUnit.METRIC else DisplayUnit.METRIC


def format_temperature(celsius: float, unit: DisplayUnit) -> str:
    """Format a Celsius value in the active unit, e.g. ``21°C`` or ``70°F``."""
    if unit is DisplayUnit.IMPERIAL:
        return f"{round_half_up(to_fahrenheit(celsius))}°F"
    return f"{round_half_up(celsius)}°C"


def format_wind(kmh: float, unit: DisplayUnit) -> str:
    """Format a km/h wind speed in the active unit, e.g. ``12 km/h`` or ``7 mph``."""
    if unit is DisplayUnit.IMPERIAL:
        return f"{round_half_up(to_mph(kmh))} mph"
    return f"{round_half_up(kmh)} km/h"
