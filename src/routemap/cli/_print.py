"""``routemap print`` — print the route tree, optionally saving it."""

import argparse

from routemap.cli._load import load_routes
from routemap.colors import console_colors
from routemap.config import DiagramConfig
from routemap.diagram import generate_text_diagram, save_diagram
from routemap.printing import print_route_listing


def run_print(args: argparse.Namespace) -> None:
    """Print the routes of ``args.app`` to stdout.

    With ``--output`` the diagram is also written to a file, without colors
    unless ``--color-file`` is given.
    """
    routes = load_routes(args)
    config = DiagramConfig(
        hierarchical=not args.flat,
        output_file=args.output,
        color_output=args.color_file,
        include_head=args.include_head,
    )

    print_route_listing(
        routes,
        config,
        use_colors=console_colors() and not args.no_color,
    )

    if config.output_file:
        diagram = generate_text_diagram(
            routes,
            hierarchical=config.hierarchical,
            use_colors=config.color_output,
        )
        if not save_diagram(diagram, config.output_file):
            raise SystemExit(1)
        print(f"Routes diagram saved to: {config.output_file}")
