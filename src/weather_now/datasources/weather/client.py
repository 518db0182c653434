"""Open-Meteo forecast API constants.

API docs: https://open-meteo.com/en/docs
"""

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Hourly variables we request; feels-like and humidity are read from these
HOURLY_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation_probability",
    "weathercode",
]

# Daily variables we request
DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "uv_index_max",
    "weathercode",
]

DEFAULT_FORECAST_DAYS = 7
