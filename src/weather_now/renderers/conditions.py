"""WMO weather code -> label and icon.

Open-Meteo reports conditions as WMO Weather Interpretation Codes
(https://open-meteo.com/en/docs). Codes are grouped into coarse categories;
anything outside the table is reported as unknown.
"""

from __future__ import annotations

from typing import NamedTuple


class Condition(NamedTuple):
    """Human label and icon for a weather code."""

    label: str
    icon: str


UNKNOWN = Condition("Unknown", "❓")

CONDITION_GROUPS: tuple[tuple[frozenset[int], Condition], ...] = (
    (frozenset({0}), Condition("Clear sky", "☀️")),
    (frozenset({1, 2, 3}), Condition("Partly cloudy", "⛅")),
    (frozenset({45, 48}), Condition("Fog", "🌫️")),
    (frozenset({51, 53, 55}), Condition("Drizzle", "🌦️")),
    (frozenset({61, 63, 65}), Condition("Rain", "🌧️")),
    (frozenset({66, 67}), Condition("Freezing rain", "🌧️🧊")),
    (frozenset({71, 73, 75}), Condition("Snow", "🌨️")),
    (frozenset({77}), Condition("Snow grains", "❄️")),
    (frozenset({80, 81, 82}), Condition("Showers", "🌦️")),
    (frozenset({85, 86}), Condition("Snow showers", "🌨️")),
    (frozenset({95}), Condition("Thunderstorm", "⛈️")),
    (frozenset({96, 99}), Condition("Thunderstorm & hail", "⛈️🧊")),
)


def resolve(code: object) -> Condition:
    """Look up the condition for a WMO code. Unrecognized codes map to ``UNKNOWN``."""
    if isinstance(code, float) and not code.is_integer():
        return UNKNOWN
    try:
        number = int(code)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        return UNKNOWN
    for codes, condition in CONDITION_GROUPS:
        if number in codes:
            return condition
    return UNKNOWN


def describe(code: object) -> str:
    """Icon and label on one line, e.g. ``⛅ Partly cloudy``."""
    condition = resolve(code)
    return f"{condition.icon} {condition.label}"
