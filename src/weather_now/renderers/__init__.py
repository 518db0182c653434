"""Rendering: weather snapshot -> display slots -> text or HTML.

Two layers:
  - presenter: snapshot + place + unit -> ``DisplaySurface`` (formatted slots)
  - text / page: ``DisplaySurface`` -> terminal text or an HTML page

Both are pure: no network, no session state. Unit conversion happens here
and nowhere else.

Public API:
  - units: to_fahrenheit, to_mph, format_temperature, format_wind, toggle_unit
  - conditions: resolve, describe
  - display: DisplaySurface, ForecastTile
  - presenter: render
  - text: render_text
  - page: build_page_html
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for HTML renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
