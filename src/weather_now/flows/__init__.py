"""
Prefect flows.

Flows:
- site: run one session (device location or search), render it to HTML

Usage (local):
    python -m weather_now.flows.site
    weather-now build --search "Lisbon" --imperial

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m weather_now.flows.site
"""
