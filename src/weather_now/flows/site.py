"""
Prefect flow for building a static weather page.

Runs one session through the controller (device location, or a search when
a query is given) and writes the rendered page to ``site/index.html``.

Run locally:
    python -m weather_now.flows.site
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from weather_now.config import get_settings
from weather_now.controller import SessionController
from weather_now.datasources.geolocation import build_locator
from weather_now.renderers.page import build_page_html


@task(name="render-session")
def render_session(query: str | None = None, imperial: bool = False) -> dict[str, Any]:
    """Run a session and render its display surface to HTML."""
    settings = get_settings()
    controller = SessionController.from_settings(settings, build_locator(settings))
    if imperial:
        controller.on_toggle_unit()
    if query:
        controller.on_search(query)
    else:
        controller.start()

    session = controller.session
    return {
        "html": build_page_html(controller.surface, session.unit),
        "place": session.last_place,
        "status": session.status_message,
        "status_kind": str(session.status_kind),
    }


@task(name="write-site")
def write_site(html: str, site_dir: Path) -> Path:
    """Write HTML to the site directory."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_site(
    query: str | None = None,
    imperial: bool = False,
    site_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Build the static weather page.

    The page is written even when the session ends in a warn/bad state, so
    the status line explains what went wrong.
    """
    target = site_dir if site_dir is not None else get_settings().site_dir

    print(f"Loading weather for {query!r}..." if query else "Loading weather for this device...")
    rendered = render_session(query, imperial)
    print(f"Status: [{rendered['status_kind']}] {rendered['status']}")

    output_path = write_site(rendered["html"], target)
    print(f"Site built: {output_path}")
    return {
        "output": str(output_path),
        "place": rendered["place"],
        "status_kind": rendered["status_kind"],
    }


if __name__ == "__main__":
    result = build_site()
    print(f"Flow complete: {result}")
