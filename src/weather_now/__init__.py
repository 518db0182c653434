"""Weather Now - current weather and a 7-day forecast for where you are.

Architecture::

    datasources/   External APIs (device location, geocoding, Open-Meteo weather)
    controller.py  Session state machine: locate/search -> fetch -> render
    renderers/     Pure data -> display slots -> terminal text / HTML
    flows/         Prefect orchestration (build renders a static page)
    services/      Shared utilities (HTTP session)

Data flow: datasources -> controller (session) -> renderers -> terminal / site/
"""

__version__ = "0.1.0"

from weather_now.config import Settings
from weather_now.schemas import Coordinate, DisplayUnit, WeatherSnapshot

__all__ = ["Coordinate", "DisplayUnit", "Settings", "WeatherSnapshot", "__version__"]
