"""Geolocation API URLs and shared constants.

API docs:
  - Forward search: https://open-meteo.com/en/docs/geocoding-api
  - Reverse lookup: https://www.bigdatacloud.com/free-api/free-reverse-geocode-to-city-api
  - IP lookup: https://ipapi.co/api/
"""

OPEN_METEO_GEOCODING_API = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_GEOCODING_API = "https://api.bigdatacloud.net/data/reverse-geocode-client"
IP_GEOLOCATION_API = "https://ipapi.co/json/"

# Reverse lookup fields, most specific first
PLACE_NAME_FIELDS = ("city", "locality", "principalSubdivision", "countryName")

DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_MAX_AGE_MS = 60_000
