"""``routemap json`` — dump routes in the JSON interchange format."""

import argparse
import json

from routemap.cli._load import load_routes
from routemap.hierarchy import build_hierarchy
from routemap.web import routes_payload


def run_json(args: argparse.Namespace) -> None:
    """Print ``[{path, methods, middleware}, ...]`` (or the tree with ``--tree``)."""
    routes = load_routes(args)
    data = build_hierarchy(routes).to_dict() if args.tree else routes_payload(routes)
    print(json.dumps(data, indent=args.indent or None, ensure_ascii=False))
