"""
Tests for the session controller and its status state machine.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from weather_now import controller as controller_module
from weather_now.controller import TRANSITIONS, SessionController
from weather_now.datasources.geolocation import (
    DeniedLocationProvider,
    DeviceLocator,
    FixedLocationProvider,
    LocationRequest,
)
from weather_now.exceptions import (
    InvalidTransition,
    LocationTimeout,
    NoResultsFound,
    SearchRequestFailed,
    WeatherRequestFailed,
)
from weather_now.renderers.display import DisplaySurface
from weather_now.schemas import (
    Coordinate,
    DisplayUnit,
    PipelineState,
    PlaceMatch,
    StatusKind,
    WeatherSnapshot,
)

BERLIN = Coordinate(latitude=52.52, longitude=13.405)
PORTO = PlaceMatch(coordinate=Coordinate(latitude=41.15, longitude=-8.61), place_name="Porto, Portugal")


class RecordingSurface(DisplaySurface):
    """Display surface that remembers every status it was given."""

    def __init__(self) -> None:
        super().__init__()
        self.history: list[tuple[str, StatusKind]] = []

    def set_status(self, message: str, kind: StatusKind = StatusKind.NEUTRAL) -> None:
        super().set_status(message, kind)
        self.history.append((message, kind))


class TimingOutProvider:
    def request(self, options: LocationRequest) -> Coordinate:
        raise LocationTimeout("too slow")


def make_controller(
    snapshot: WeatherSnapshot | None = None,
    *,
    provider: Any = "fixed",
    fetch_weather: Mock | None = None,
    search: Mock | None = None,
) -> tuple[SessionController, Mock, Mock, Mock]:
    if provider == "fixed":
        provider = FixedLocationProvider(BERLIN)
    fetch = fetch_weather or Mock(return_value=snapshot)
    reverse = Mock(return_value="Berlin")
    search = search or Mock(return_value=PORTO)
    controller = SessionController(
        DeviceLocator(provider),
        fetch_weather=fetch,
        reverse_geocode=reverse,
        search=search,
        timeout_ms=1000,
        max_age_ms=0,
        surface=RecordingSurface(),
    )
    return controller, fetch, reverse, search


class TestInitialState:
    """Test the session at startup."""

    def test_defaults(self) -> None:
        controller, *_ = make_controller()
        session = controller.session

        assert session.unit is DisplayUnit.METRIC
        assert session.last_snapshot is None
        assert session.last_place is None
        assert session.state is PipelineState.IDLE
        assert session.status_kind is StatusKind.NEUTRAL

    def test_session_is_a_copy(self) -> None:
        controller, *_ = make_controller()
        controller.session.unit = DisplayUnit.IMPERIAL
        assert controller.session.unit is DisplayUnit.METRIC


class TestTransitions:
    """Test the transition table."""

    def test_every_state_has_an_entry(self) -> None:
        assert set(TRANSITIONS) == set(PipelineState)

    def test_rendered_is_reachable_from_every_command_path(self) -> None:
        for state in (
            PipelineState.LOCATING,
            PipelineState.SEARCHING,
            PipelineState.FETCHING_WEATHER,
        ):
            assert PipelineState.RENDERED in TRANSITIONS[state]

    def test_reverse_geocoding_cannot_abort(self) -> None:
        assert TRANSITIONS[PipelineState.REVERSE_GEOCODING] == {PipelineState.FETCHING_WEATHER}

    def test_illegal_transition(self) -> None:
        controller, *_ = make_controller()
        with pytest.raises(InvalidTransition):
            controller._enter(PipelineState.FETCHING_WEATHER, "Fetching weather…")


class TestStartup:
    """Test auto-load on start."""

    def test_success(self, snapshot: WeatherSnapshot) -> None:
        controller, fetch, reverse, _ = make_controller(snapshot)

        controller.start()

        session = controller.session
        assert session.state is PipelineState.RENDERED
        assert session.status_kind is StatusKind.OK
        assert session.status_message == controller_module.MSG_LOADED
        assert session.last_snapshot == snapshot
        assert session.last_place == "Berlin"
        reverse.assert_called_once_with(BERLIN)
        fetch.assert_called_once_with(BERLIN, forecast_days=7)
        assert controller.surface.condition == "⛅ Partly cloudy"

    def test_walks_pipeline_stages(self, snapshot: WeatherSnapshot) -> None:
        controller, *_ = make_controller(snapshot)

        controller.start()

        assert controller.surface.history == [  # type: ignore[attr-defined]
            (controller_module.MSG_LOCATING, StatusKind.NEUTRAL),
            (controller_module.MSG_REVERSE_GEOCODING, StatusKind.NEUTRAL),
            (controller_module.MSG_FETCHING, StatusKind.NEUTRAL),
            (controller_module.MSG_LOADED, StatusKind.OK),
        ]

    @pytest.mark.parametrize("provider", [None, DeniedLocationProvider(), TimingOutProvider()])
    def test_location_failure_prompts(self, provider: Any, snapshot: WeatherSnapshot) -> None:
        controller, fetch, reverse, _ = make_controller(snapshot, provider=provider)

        controller.start()

        session = controller.session
        assert session.status_kind is StatusKind.WARN
        assert session.status_message == controller_module.MSG_STARTUP_PROMPT
        assert session.last_snapshot is None
        assert not controller.surface.has_weather
        reverse.assert_not_called()
        fetch.assert_not_called()


class TestRequestLocation:
    """Test the manual "use my location" command."""

    def test_permission_denied_message(self) -> None:
        controller, *_ = make_controller(provider=DeniedLocationProvider())

        controller.on_request_location()

        assert controller.session.status_kind is StatusKind.WARN
        assert controller.session.status_message == controller_module.MSG_PERMISSION_DENIED

    def test_generic_failure_message(self) -> None:
        controller, *_ = make_controller(provider=TimingOutProvider())

        controller.on_request_location()

        assert controller.session.status_kind is StatusKind.WARN
        assert controller.session.status_message == controller_module.MSG_LOCATE_FAILED

    def test_fetch_failure_is_bad(self) -> None:
        controller, *_ = make_controller(
            fetch_weather=Mock(side_effect=WeatherRequestFailed("down"))
        )

        controller.on_request_location()

        session = controller.session
        assert session.status_kind is StatusKind.BAD
        assert session.status_message == controller_module.MSG_FETCH_FAILED
        assert session.last_snapshot is None
        assert session.last_place is None
        assert not controller.surface.has_weather

    def test_failure_keeps_last_good_snapshot(self, snapshot: WeatherSnapshot) -> None:
        fetch = Mock(side_effect=[snapshot, WeatherRequestFailed("down")])
        controller, _, reverse, _ = make_controller(fetch_weather=fetch)
        controller.start()
        shown = controller.surface.temperature
        reverse.return_value = "Somewhere else"

        controller.on_request_location()

        session = controller.session
        assert session.status_kind is StatusKind.BAD
        assert session.last_snapshot == snapshot
        assert session.last_place == "Berlin"
        assert controller.surface.temperature == shown
        assert controller.surface.place == "Berlin"

    def test_location_failure_keeps_last_good_snapshot(self, snapshot: WeatherSnapshot) -> None:
        controller, *_ = make_controller(snapshot)
        controller.start()
        controller._locator = DeviceLocator(DeniedLocationProvider())

        controller.on_request_location()

        assert controller.session.status_kind is StatusKind.WARN
        assert controller.surface.has_weather
        assert controller.session.last_snapshot == snapshot


class TestToggleUnit:
    """Test °C/°F switching."""

    def test_without_snapshot_only_flips_unit(self) -> None:
        controller, fetch, *_ = make_controller()

        controller.on_toggle_unit()

        session = controller.session
        assert session.unit is DisplayUnit.IMPERIAL
        assert session.state is PipelineState.IDLE
        assert not controller.surface.has_weather
        fetch.assert_not_called()

    def test_rerenders_from_cache(self, snapshot: WeatherSnapshot) -> None:
        controller, fetch, reverse, _ = make_controller(snapshot)
        controller.start()

        controller.on_toggle_unit()

        assert controller.surface.temperature == "54°F"
        assert controller.surface.wind == "9 mph"
        assert controller.session.status_kind is StatusKind.OK
        assert controller.session.state is PipelineState.RENDERED
        fetch.assert_called_once()
        reverse.assert_called_once()

    def test_double_toggle_round_trip(self, snapshot: WeatherSnapshot) -> None:
        controller, *_ = make_controller(snapshot)
        controller.start()
        before = (
            controller.surface.temperature,
            controller.surface.feels_like,
            controller.surface.wind,
            list(controller.surface.forecast),
        )

        controller.on_toggle_unit()
        controller.on_toggle_unit()

        assert controller.session.unit is DisplayUnit.METRIC
        after = (
            controller.surface.temperature,
            controller.surface.feels_like,
            controller.surface.wind,
            list(controller.surface.forecast),
        )
        assert after == before

    def test_unit_survives_next_fetch(self, snapshot: WeatherSnapshot) -> None:
        controller, *_ = make_controller(snapshot)
        controller.on_toggle_unit()

        controller.start()

        assert controller.surface.temperature == "54°F"


class TestSearch:
    """Test free-text search."""

    def test_success_skips_reverse_lookup(self, snapshot: WeatherSnapshot) -> None:
        controller, fetch, reverse, search = make_controller(snapshot)

        controller.on_search("  Porto ")

        search.assert_called_once_with("Porto")
        reverse.assert_not_called()
        fetch.assert_called_once_with(PORTO.coordinate, forecast_days=7)
        session = controller.session
        assert session.status_kind is StatusKind.OK
        assert session.last_place == "Porto, Portugal"
        assert controller.surface.place == "Porto, Portugal"
        assert controller.surface.history[0] == ('Searching for "Porto"…', StatusKind.NEUTRAL)  # type: ignore[attr-defined]

    def test_no_results_echoes_query(self, snapshot: WeatherSnapshot) -> None:
        controller, fetch, *_ = make_controller(
            snapshot, search=Mock(side_effect=NoResultsFound("Nowhereville"))
        )

        controller.on_search("Nowhereville")

        session = controller.session
        assert session.status_kind is StatusKind.WARN
        assert "Nowhereville" in session.status_message
        fetch.assert_not_called()

    def test_request_failure_is_bad(self) -> None:
        controller, *_ = make_controller(search=Mock(side_effect=SearchRequestFailed("down")))

        controller.on_search("Berlin")

        assert controller.session.status_kind is StatusKind.BAD
        assert controller.session.status_message == controller_module.MSG_SEARCH_FAILED

    def test_fetch_failure_after_search(self) -> None:
        controller, *_ = make_controller(
            fetch_weather=Mock(side_effect=WeatherRequestFailed("down"))
        )

        controller.on_search("Porto")

        assert controller.session.status_kind is StatusKind.BAD
        assert controller.session.last_place is None

    def test_blank_query_ignored(self) -> None:
        controller, _, _, search = make_controller()

        controller.on_search("   ")

        search.assert_not_called()
        assert controller.session.state is PipelineState.IDLE

    def test_last_completed_wins(self, snapshot: WeatherSnapshot) -> None:
        lisbon = PlaceMatch(
            coordinate=Coordinate(latitude=38.72, longitude=-9.14), place_name="Lisbon, Portugal"
        )
        controller, *_ = make_controller(snapshot, search=Mock(side_effect=[PORTO, lisbon]))

        controller.on_search("Porto")
        controller.on_search("Lisbon")

        assert controller.session.last_place == "Lisbon, Portugal"


class TestEndToEnd:
    """Device location -> real reverse lookup and weather parsing, HTTP mocked."""

    def _route(
        self,
        weather_payload: dict[str, Any],
        make_response: Callable[..., Mock],
        *,
        reverse_fails: bool = False,
    ) -> Callable[..., Mock]:
        def get(url: str, **kwargs: Any) -> Mock:
            if "bigdatacloud" in url:
                if reverse_fails:
                    raise requests.ConnectionError("offline")
                return make_response({"city": "Berlin", "countryName": "Germany"})
            if "api.open-meteo.com" in url:
                return make_response(weather_payload)
            raise AssertionError(f"unexpected URL {url}")

        return get

    def test_berlin(
        self, weather_payload: dict[str, Any], make_response: Callable[..., Mock]
    ) -> None:
        controller = SessionController(DeviceLocator(FixedLocationProvider(BERLIN)))

        with patch(
            "weather_now.services.http.session.get",
            side_effect=self._route(weather_payload, make_response),
        ):
            controller.start()

        assert controller.surface.condition == "⛅ Partly cloudy"
        assert controller.surface.place == "Berlin"
        assert controller.session.status_kind is StatusKind.OK
        assert len(controller.surface.forecast) == 7

    def test_non_finite_payload_settles_bad_and_recovers(
        self, weather_payload: dict[str, Any], make_response: Callable[..., Mock]
    ) -> None:
        broken = {**weather_payload, "current_weather": {**weather_payload["current_weather"]}}
        broken["current_weather"]["temperature"] = float("inf")
        controller = SessionController(
            DeviceLocator(FixedLocationProvider(BERLIN)),
            search=Mock(return_value=PORTO),
        )

        with patch(
            "weather_now.services.http.session.get",
            side_effect=self._route(broken, make_response),
        ):
            controller.start()

        session = controller.session
        assert session.state is PipelineState.RENDERED
        assert session.status_kind is StatusKind.BAD
        assert session.last_snapshot is None
        assert not controller.surface.has_weather

        with patch(
            "weather_now.services.http.session.get",
            side_effect=self._route(weather_payload, make_response),
        ):
            controller.on_search("Porto")

        assert controller.session.status_kind is StatusKind.OK
        assert controller.surface.place == "Porto, Portugal"

    def test_reverse_lookup_failure_does_not_abort(
        self, weather_payload: dict[str, Any], make_response: Callable[..., Mock]
    ) -> None:
        controller = SessionController(DeviceLocator(FixedLocationProvider(BERLIN)))

        with patch(
            "weather_now.services.http.session.get",
            side_effect=self._route(weather_payload, make_response, reverse_fails=True),
        ):
            controller.start()

        assert controller.session.status_kind is StatusKind.OK
        assert controller.session.last_place == "52.520, 13.405"
        assert controller.surface.place == "52.520, 13.405"
