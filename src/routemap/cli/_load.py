"""Shared loading step: import string -> filtered routes, or exit 1."""

import argparse
import re
import sys
from typing import Any

from routemap.cli._resolve import resolve_app
from routemap.errors import AppResolutionError
from routemap.extract import collect_routes, load_routing_table
from routemap.filtering import compile_patterns, filter_routes
from routemap.model import Route


def load_routes(args: argparse.Namespace) -> list[Route]:
    """Resolve ``args.app``, extract and filter its routes.

    Prints ``Error: ...`` to stderr and exits 1 when the application cannot
    be imported or exposes no routing table.
    """
    try:
        target: Any = resolve_app(args.app)
    except (ImportError, SyntaxError, AppResolutionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    located = load_routing_table(target)
    if located is None:
        print(
            f"Error: could not find a Starlette application in {args.app!r}",
            file=sys.stderr,
        )
        raise SystemExit(1)

    try:
        patterns = compile_patterns(getattr(args, "exclude", None) or ())
    except re.error as exc:
        print(f"Error: invalid --exclude expression: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    _, layers = located
    routes = collect_routes(layers, include_head=getattr(args, "include_head", False))
    return filter_routes(routes, patterns)
