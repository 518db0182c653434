"""
Session controller: drives location -> weather -> display for one session.

The controller is the only code that mutates the ``Session``. Its public
commands mirror what a user can do:

    controller.start()                 # auto-load from the device location
    controller.on_request_location()   # "use my location"
    controller.on_search("Porto")      # free-text search
    controller.on_toggle_unit()        # °C <-> °F, never hits the network

Each command walks the pipeline states in ``TRANSITIONS`` and settles in
``RENDERED`` with an ok/warn/bad status. Errors from the datasources are
turned into status messages here and never propagate to the caller. The
last good snapshot stays on the display after any failure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from weather_now.datasources import weather
from weather_now.datasources.geolocation import reverse_lookup, search_place
from weather_now.datasources.geolocation.client import DEFAULT_MAX_AGE_MS, DEFAULT_TIMEOUT_MS
from weather_now.datasources.weather.client import DEFAULT_FORECAST_DAYS
from weather_now.exceptions import (
    InvalidTransition,
    LocationError,
    LocationUnavailable,
    NoResultsFound,
    PermissionDenied,
    SearchRequestFailed,
    WeatherRequestFailed,
)
from weather_now.renderers import presenter
from weather_now.renderers.display import DisplaySurface
from weather_now.renderers.units import toggle_unit
from weather_now.schemas import (
    Coordinate,
    DisplayUnit,
    PipelineState,
    PlaceMatch,
    Session,
    StatusKind,
    WeatherSnapshot,
)

if TYPE_CHECKING:
    from weather_now.config import Settings
    from weather_now.datasources.geolocation import DeviceLocator

logger = logging.getLogger(__name__)

TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.LOCATING, PipelineState.SEARCHING}),
    PipelineState.LOCATING: frozenset({PipelineState.REVERSE_GEOCODING, PipelineState.RENDERED}),
    PipelineState.REVERSE_GEOCODING: frozenset({PipelineState.FETCHING_WEATHER}),
    PipelineState.SEARCHING: frozenset({PipelineState.FETCHING_WEATHER, PipelineState.RENDERED}),
    PipelineState.FETCHING_WEATHER: frozenset({PipelineState.RENDERED}),
    PipelineState.RENDERED: frozenset(
        {PipelineState.LOCATING, PipelineState.SEARCHING, PipelineState.RENDERED}
    ),
}

MSG_LOCATING = "Requesting location…"
MSG_REVERSE_GEOCODING = "Looking up place name…"
MSG_FETCHING = "Fetching weather…"
MSG_LOADED = "Live weather loaded ✓"
MSG_FETCH_FAILED = "Could not load weather. Check your internet connection or try again."
MSG_STARTUP_PROMPT = 'Use "locate" and allow location access, or search for a place.'
MSG_PERMISSION_DENIED = "Permission denied. Please allow location access."
MSG_LOCATE_FAILED = "Could not get your location."
MSG_SEARCH_FAILED = "Could not search location."
UNIT_SYMBOLS = {DisplayUnit.METRIC: "°C", DisplayUnit.IMPERIAL: "°F"}


class SessionController:
    """Owns the session and the display surface; exposes the user commands."""

    def __init__(
        self,
        locator: DeviceLocator,
        *,
        fetch_weather: Callable[..., WeatherSnapshot] = weather.fetch,
        reverse_geocode: Callable[[Coordinate], str] = reverse_lookup,
        search: Callable[[str], PlaceMatch] = search_place,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
        surface: DisplaySurface | None = None,
    ) -> None:
        self._locator = locator
        self._fetch_weather = fetch_weather
        self._reverse_geocode = reverse_geocode
        self._search = search
        self.timeout_ms = timeout_ms
        self.max_age_ms = max_age_ms
        self.forecast_days = forecast_days
        self._session = Session()
        self._surface = surface if surface is not None else DisplaySurface()

    @classmethod
    def from_settings(cls, settings: Settings, locator: DeviceLocator) -> SessionController:
        return cls(
            locator,
            timeout_ms=settings.location_timeout_ms,
            max_age_ms=settings.location_max_age_ms,
            forecast_days=settings.forecast_days,
        )

    @property
    def session(self) -> Session:
        """A copy of the current session state."""
        return self._session.model_copy()

    @property
    def surface(self) -> DisplaySurface:
        return self._surface

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    def _enter(
        self, state: PipelineState, message: str, kind: StatusKind = StatusKind.NEUTRAL
    ) -> None:
        current = self._session.state
        if state not in TRANSITIONS[current]:
            raise InvalidTransition(f"{current} -> {state} is not allowed")
        self._session.state = state
        self._session.status_message = message
        self._session.status_kind = kind
        self._surface.set_status(message, kind)
        logger.debug("%s -> %s [%s] %s", current, state, kind, message)

    def _settle(self, message: str, kind: StatusKind) -> None:
        self._enter(PipelineState.RENDERED, message, kind)

    def _render(self) -> None:
        snapshot = self._session.last_snapshot
        if snapshot is None:
            return
        presenter.render(snapshot, self._session.last_place, self._session.unit, self._surface)

    # -------------------------------------------------------------------------
    # Pipeline steps
    # -------------------------------------------------------------------------

    def _locate(self, *, startup: bool) -> None:
        self._enter(PipelineState.LOCATING, MSG_LOCATING)
        try:
            coord = self._locator.acquire_device_location(self.timeout_ms, self.max_age_ms)
        except PermissionDenied as exc:
            logger.warning("Location permission denied: %s", exc)
            self._settle(MSG_STARTUP_PROMPT if startup else MSG_PERMISSION_DENIED, StatusKind.WARN)
            return
        except (LocationUnavailable, LocationError) as exc:
            logger.warning("Could not get device location: %s", exc)
            self._settle(MSG_STARTUP_PROMPT if startup else MSG_LOCATE_FAILED, StatusKind.WARN)
            return

        self._enter(PipelineState.REVERSE_GEOCODING, MSG_REVERSE_GEOCODING)
        place = self._reverse_geocode(coord)
        self._load(coord, place)

    def _load(self, coord: Coordinate, place: str) -> None:
        self._enter(PipelineState.FETCHING_WEATHER, MSG_FETCHING)
        try:
            snapshot = self._fetch_weather(coord, forecast_days=self.forecast_days)
        except WeatherRequestFailed as exc:
            logger.warning("Weather fetch failed for %s: %s", place, exc)
            self._settle(MSG_FETCH_FAILED, StatusKind.BAD)
            return

        self._session.last_snapshot = snapshot
        self._session.last_place = place
        self._render()
        self._settle(MSG_LOADED, StatusKind.OK)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Auto-load weather for the device location, quietly prompting on failure."""
        self._locate(startup=True)

    def on_request_location(self) -> None:
        """User asked for weather at their current location."""
        self._locate(startup=False)

    def on_toggle_unit(self) -> None:
        """Switch °C/°F and re-render the cached snapshot. Never fetches."""
        self._session.unit = toggle_unit(self._session.unit)
        if self._session.last_snapshot is None:
            return
        self._render()
        self._settle(f"Showing {UNIT_SYMBOLS[self._session.unit]}", StatusKind.OK)

    def on_search(self, query: str) -> None:
        """Look up a place by name and load its weather. Blank queries are ignored."""
        query = query.strip()
        if not query:
            return
        self._enter(PipelineState.SEARCHING, f'Searching for "{query}"…')
        try:
            match = self._search(query)
        except NoResultsFound:
            self._settle(f'No results for "{query}"', StatusKind.WARN)
            return
        except SearchRequestFailed as exc:
            logger.warning("Place search failed: %s", exc)
            self._settle(MSG_SEARCH_FAILED, StatusKind.BAD)
            return

        self._load(match.coordinate, match.place_name)
