"""``routemap serve`` — serve the diagram of an app from a standalone server."""

import argparse
import sys

from routemap.cli._load import load_routes
from routemap.errors import ConfigurationError


def run_serve(args: argparse.Namespace) -> None:
    """Extract ``args.app`` once and serve that snapshot until interrupted."""
    routes = load_routes(args)

    from routemap.server import run_diagram_server

    try:
        run_diagram_server(
            routes,
            host=args.host,
            port=args.port,
            web_route=args.diagram_route,
        )
    except (ConfigurationError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
