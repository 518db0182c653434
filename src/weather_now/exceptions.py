"""Error taxonomy for the location, search and weather pipeline."""

from __future__ import annotations


class WeatherNowError(RuntimeError):
    """Base class for every error raised by weather-now."""


# --- Device location ---


class LocationUnavailable(WeatherNowError):
    """No device location capability is configured."""


class PermissionDenied(WeatherNowError):
    """The user refused access to their location."""


class LocationError(WeatherNowError):
    """The location lookup failed."""


class LocationTimeout(LocationError):
    """The location lookup did not finish within the caller's timeout."""


# --- Geocoding ---


class ReverseGeocodeFailed(WeatherNowError):
    """Reverse lookup failed. Absorbed by ``reverse_lookup``."""


class SearchRequestFailed(WeatherNowError):
    """The place search request could not be completed."""


class NoResultsFound(WeatherNowError):
    """The place search returned no matches."""

    def __init__(self, query: str) -> None:
        super().__init__(f'No results for "{query}"')
        self.query = query


# --- Weather ---


class WeatherRequestFailed(WeatherNowError):
    """The weather provider request failed or returned an unusable payload."""


# --- Session ---


class InvalidTransition(WeatherNowError):
    """The session controller attempted a transition its table does not allow."""
