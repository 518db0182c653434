"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Sources:
  - geolocation/   device position, reverse lookup, place search
  - weather/       Open-Meteo current conditions + daily forecast

Fetch functions use the shared session and translate every failure into the
error taxonomy in ``weather_now.exceptions``::

    from weather_now.services.http import session

    def fetch_something(coord) -> dict[str, Any]:
        try:
            resp = session.get(API_URL, params={...})
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise SomethingFailed("...") from exc
"""
