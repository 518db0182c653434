"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

from weather_now import __version__
from weather_now.config import get_settings
from weather_now.controller import SessionController
from weather_now.datasources.geolocation import build_locator
from weather_now.flows.site import build_site
from weather_now.renderers.text import render_text
from weather_now.schemas import StatusKind

INTERACTIVE_HELP = """Commands:
  locate          weather for your current location
  search <place>  weather for a place, e.g. "search Porto"
  unit            switch between °C and °F
  help            show this help
  quit            exit"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-now",
        description="Current weather and 7-day forecast for your location or any place",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'show' command - one-shot lookup
    show_parser = subparsers.add_parser("show", help="Show weather once and exit")
    show_parser.add_argument(
        "-s",
        "--search",
        type=str,
        default=None,
        help="Place to search for (default: use device location)",
    )
    show_parser.add_argument("--imperial", action="store_true", help="Show °F and mph")

    # 'interactive' command - command loop driving the session
    subparsers.add_parser("interactive", help="Interactive session (locate, search, unit)")

    # 'build' command - render a static page
    build_parser = subparsers.add_parser("build", help="Build the static weather page")
    build_parser.add_argument(
        "-s",
        "--search",
        type=str,
        default=None,
        help="Place to search for (default: use device location)",
    )
    build_parser.add_argument("--imperial", action="store_true", help="Show °F and mph")

    # 'serve' command - serve built site locally
    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def configure_logging(debug: bool) -> None:
    settings = get_settings()
    level = logging.DEBUG if debug or settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _create_controller() -> SessionController:
    settings = get_settings()
    return SessionController.from_settings(settings, build_locator(settings))


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Location provider: {settings.location_provider}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the 'show' command."""
    controller = _create_controller()
    if args.imperial:
        controller.on_toggle_unit()
    if args.search:
        controller.on_search(args.search)
    else:
        controller.start()

    print(render_text(controller.surface))
    return 0 if controller.session.status_kind is StatusKind.OK else 1


def cmd_interactive(_args: argparse.Namespace) -> int:
    """Handle the 'interactive' command."""
    controller = _create_controller()
    print(INTERACTIVE_HELP)
    controller.start()
    print(render_text(controller.surface))

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        command, _, rest = line.partition(" ")
        command = command.lower()
        if not command:
            continue
        if command in ("quit", "exit", "q"):
            return 0
        if command == "help":
            print(INTERACTIVE_HELP)
            continue
        if command in ("locate", "l"):
            controller.on_request_location()
        elif command in ("unit", "u"):
            controller.on_toggle_unit()
        elif command in ("search", "s"):
            if not rest.strip():
                print("Usage: search <place>")
                continue
            controller.on_search(rest)
        else:
            print(f"Unknown command: {command}. Type 'help' for commands.")
            continue
        print(render_text(controller.surface))


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command: render the session to site/index.html."""
    result = build_site(query=args.search, imperial=args.imperial)
    return 0 if result.get("status_kind") == StatusKind.OK else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'weather-now build' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "info": cmd_info,
        "show": cmd_show,
        "interactive": cmd_interactive,
        "build": cmd_build,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
