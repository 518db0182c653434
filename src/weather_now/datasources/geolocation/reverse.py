"""Coordinate -> place name, with a coordinate-text fallback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from weather_now.datasources.geolocation.client import PLACE_NAME_FIELDS, REVERSE_GEOCODING_API
from weather_now.exceptions import ReverseGeocodeFailed
from weather_now.services.http import session

if TYPE_CHECKING:
    from weather_now.schemas import Coordinate

logger = logging.getLogger(__name__)


def fetch_place_name(coord: Coordinate) -> str:
    """
    Look up the locality name for a coordinate.

    Raises:
        ReverseGeocodeFailed: on transport errors, non-2xx status, a malformed
            payload, or when none of the name fields is present.
    """
    params = {
        "latitude": coord.latitude,
        "longitude": coord.longitude,
        "localityLanguage": "en",
    }
    try:
        resp = session.get(REVERSE_GEOCODING_API, params=params)
        resp.raise_for_status()
        data: Any = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise ReverseGeocodeFailed(f"Reverse lookup failed for {coord.fallback_name()}") from exc

    if not isinstance(data, dict):
        raise ReverseGeocodeFailed("Unexpected reverse geocoding response shape")

    for field in PLACE_NAME_FIELDS:
        value = data.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    raise ReverseGeocodeFailed(f"No place name for {coord.fallback_name()}")


def reverse_lookup(coord: Coordinate) -> str:
    """
    Resolve a display name for a coordinate. Never raises.

    Falls back to ``"{lat:.3f}, {lon:.3f}"`` when the lookup fails for any reason.
    """
    try:
        return fetch_place_name(coord)
    except ReverseGeocodeFailed as exc:
        logger.warning("%s; using coordinates as place name", exc)
        return coord.fallback_name()
