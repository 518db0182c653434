"""Free-text place search via the Open-Meteo geocoding API."""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from weather_now.datasources.geolocation.client import OPEN_METEO_GEOCODING_API
from weather_now.exceptions import NoResultsFound, SearchRequestFailed
from weather_now.schemas import Coordinate, PlaceMatch
from weather_now.services.http import session

logger = logging.getLogger(__name__)


def _place_label(name: Any, country: Any) -> str:
    name_text = str(name or "").strip()
    country_text = str(country or "").strip()
    if name_text and country_text:
        return f"{name_text}, {country_text}"
    return name_text or country_text


def search_place(query: str) -> PlaceMatch:
    """
    Find the best-ranked place for a free-text query.

    Args:
        query: Place name, e.g. ``"Berlin"`` or ``"Porto, Portugal"``.

    Returns:
        The first match with its coordinate and a ``"Name, Country"`` label.

    Raises:
        ValueError: if the query is blank.
        NoResultsFound: if the service returned no matches.
        SearchRequestFailed: on transport errors, non-2xx status or a malformed payload.
    """
    query = query.strip()
    if not query:
        raise ValueError("query must not be empty")

    params: dict[str, str | int] = {
        "name": query,
        "count": 1,
        "language": "en",
        "format": "json",
    }
    try:
        resp = session.get(OPEN_METEO_GEOCODING_API, params=params)
        resp.raise_for_status()
        data: Any = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise SearchRequestFailed(f'Search request failed for "{query}"') from exc

    if not isinstance(data, dict):
        raise SearchRequestFailed("Unexpected geocoding response shape")

    results = data.get("results")
    if not results:
        raise NoResultsFound(query)
    if not isinstance(results, list) or not isinstance(results[0], dict):
        raise SearchRequestFailed("Unexpected geocoding results shape")

    best = results[0]
    label = _place_label(best.get("name"), best.get("country"))
    try:
        match = PlaceMatch(
            coordinate=Coordinate(latitude=best.get("latitude"), longitude=best.get("longitude")),
            place_name=label or query,
        )
    except ValidationError as exc:
        raise SearchRequestFailed(f'Search result for "{query}" had no usable coordinates') from exc

    logger.debug("Search %r matched %s at %s", query, match.place_name, match.coordinate)
    return match
