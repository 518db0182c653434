"""Location resolution: device position, reverse lookup and place search.

Public API:
  - device: DeviceLocator, LocationRequest, build_locator and the providers
  - reverse: reverse_lookup (never raises), fetch_place_name
  - search: search_place
  - client: API URLs, shared constants
"""

from weather_now.datasources.geolocation.client import (
    IP_GEOLOCATION_API,
    OPEN_METEO_GEOCODING_API,
    REVERSE_GEOCODING_API,
)
from weather_now.datasources.geolocation.device import (
    DeniedLocationProvider,
    DeviceLocationProvider,
    DeviceLocator,
    FixedLocationProvider,
    IpGeolocationProvider,
    LocationRequest,
    build_locator,
)
from weather_now.datasources.geolocation.reverse import fetch_place_name, reverse_lookup
from weather_now.datasources.geolocation.search import search_place

__all__ = [
    "IP_GEOLOCATION_API",
    "OPEN_METEO_GEOCODING_API",
    "REVERSE_GEOCODING_API",
    "DeniedLocationProvider",
    "DeviceLocationProvider",
    "DeviceLocator",
    "FixedLocationProvider",
    "IpGeolocationProvider",
    "LocationRequest",
    "build_locator",
    "fetch_place_name",
    "reverse_lookup",
    "search_place",
]
