"""Device location acquisition.

A ``DeviceLocationProvider`` answers "where am I?". ``DeviceLocator`` wraps
one with the caller's timeout and a max-age cache of the last fix, and maps
every failure onto the location error taxonomy.

Providers:
  - IpGeolocationProvider: approximate position from the public IP address
  - FixedLocationProvider: a configured coordinate (hosts without positioning)
  - DeniedLocationProvider: the user has withheld location access
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import requests
from pydantic import ValidationError

from weather_now.datasources.geolocation.client import (
    DEFAULT_MAX_AGE_MS,
    DEFAULT_TIMEOUT_MS,
    IP_GEOLOCATION_API,
)
from weather_now.exceptions import (
    LocationError,
    LocationTimeout,
    LocationUnavailable,
    PermissionDenied,
    WeatherNowError,
)
from weather_now.schemas import Coordinate
from weather_now.services.http import session

if TYPE_CHECKING:
    from weather_now.config import Settings

logger = logging.getLogger(__name__)

# Statuses the IP lookup uses to refuse a client outright
_REFUSED_STATUSES = frozenset({401, 403})


@dataclass(frozen=True)
class LocationRequest:
    """Options passed to a provider for one lookup."""

    enable_high_accuracy: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_age_ms: int = DEFAULT_MAX_AGE_MS


class DeviceLocationProvider(Protocol):
    def request(self, options: LocationRequest) -> Coordinate:
        """Return the current position or raise a location error."""


class IpGeolocationProvider:
    """Approximate location from the machine's public IP address."""

    def __init__(self, url: str = IP_GEOLOCATION_API) -> None:
        self._url = url

    def request(self, options: LocationRequest) -> Coordinate:
        try:
            resp = session.get(self._url, timeout=options.timeout_ms / 1000)
        except requests.Timeout as exc:
            raise LocationTimeout("IP geolocation lookup timed out") from exc
        except requests.RequestException as exc:
            raise LocationError("IP geolocation lookup failed") from exc

        if resp.status_code in _REFUSED_STATUSES:
            raise PermissionDenied(f"IP geolocation refused the request ({resp.status_code})")

        try:
            resp.raise_for_status()
            data: Any = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise LocationError("IP geolocation returned an unusable response") from exc

        if not isinstance(data, dict):
            raise LocationError("Unexpected IP geolocation response shape")
        try:
            return Coordinate(latitude=data.get("latitude"), longitude=data.get("longitude"))
        except ValidationError as exc:
            raise LocationError("IP geolocation response had no usable coordinates") from exc


class FixedLocationProvider:
    """Always reports the same coordinate."""

    def __init__(self, coordinate: Coordinate) -> None:
        self.coordinate = coordinate

    def request(self, options: LocationRequest) -> Coordinate:
        return self.coordinate


class DeniedLocationProvider:
    """Location capability exists but access was not granted."""

    def request(self, options: LocationRequest) -> Coordinate:
        raise PermissionDenied("Location access is disabled in settings")


class DeviceLocator:
    """
    Acquire the device position with an authoritative timeout.

    The provider runs on a daemon thread; if it has not answered within
    ``timeout_ms`` the lookup is abandoned and ``LocationTimeout`` is raised.
    An abandoned thread finishes on its own and does not delay exit.
    A previous fix no older than ``max_age_ms`` is returned without asking
    the provider again.
    """

    def __init__(
        self,
        provider: DeviceLocationProvider | None,
        *,
        enable_high_accuracy: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.enable_high_accuracy = enable_high_accuracy
        self._clock = clock
        self._last_fix: tuple[Coordinate, float] | None = None

    def _cached_fix(self, max_age_ms: int) -> Coordinate | None:
        if self._last_fix is None or max_age_ms <= 0:
            return None
        coordinate, obtained_at = self._last_fix
        age_ms = (self._clock() - obtained_at) * 1000
        if age_ms <= max_age_ms:
            return coordinate
        return None

    def acquire_device_location(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
    ) -> Coordinate:
        """
        Return the current device coordinate.

        Raises:
            LocationUnavailable: no provider is configured.
            PermissionDenied: the provider refused access.
            LocationTimeout: no answer within ``timeout_ms``.
            LocationError: any other lookup failure.
        """
        if self.provider is None:
            raise LocationUnavailable("No device location capability configured")

        cached = self._cached_fix(max_age_ms)
        if cached is not None:
            logger.debug("Reusing device location fix %s", cached)
            return cached

        options = LocationRequest(
            enable_high_accuracy=self.enable_high_accuracy,
            timeout_ms=timeout_ms,
            max_age_ms=max_age_ms,
        )
        provider = self.provider
        outcome: dict[str, Any] = {}
        answered = threading.Event()

        def _ask() -> None:
            try:
                outcome["coordinate"] = provider.request(options)
            except Exception as exc:
                outcome["error"] = exc
            finally:
                answered.set()

        # Daemon: a provider that never answers must not hold up interpreter exit.
        threading.Thread(target=_ask, name="device-location", daemon=True).start()
        if not answered.wait(timeout_ms / 1000):
            raise LocationTimeout(f"Location lookup exceeded {timeout_ms} ms")

        error = outcome.get("error")
        if isinstance(error, WeatherNowError):
            raise error
        if error is not None:
            raise LocationError("Location provider failed") from error

        coordinate: Coordinate = outcome["coordinate"]
        self._last_fix = (coordinate, self._clock())
        logger.debug("Device location acquired: %s", coordinate)
        return coordinate


def build_locator(settings: Settings) -> DeviceLocator:
    """Create the locator described by ``settings.location_provider``."""
    provider: DeviceLocationProvider | None
    if settings.location_provider == "ip":
        provider = IpGeolocationProvider()
    elif settings.location_provider == "fixed":
        provider = FixedLocationProvider(
            Coordinate(latitude=settings.fixed_lat, longitude=settings.fixed_lon)
        )
    elif settings.location_provider == "denied":
        provider = DeniedLocationProvider()
    else:
        provider = None
    return DeviceLocator(provider, enable_high_accuracy=settings.high_accuracy)
