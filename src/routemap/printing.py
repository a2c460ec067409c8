"""Console printers built on the extractor, filters and diagrams.

``print_app_routes`` is the standalone entry point: extract, filter, print
and optionally save, without installing any middleware.
"""

from collections.abc import Sequence
from typing import Any

from routemap.colors import COLORS, colorize
from routemap.config import DiagramConfig
from routemap.diagram import TITLE, format_flat_line, generate_text_diagram, save_diagram
from routemap.extract import extract
from routemap.filtering import filter_routes
from routemap.hierarchy import NO_ROUTES, build_hierarchy, render
from routemap.model import Route


def _print_header(use_colors: bool) -> None:
    underline = "=" * len(TITLE)
    if use_colors:
        print(f"\n{COLORS['bright']}{colorize(TITLE, 'cyan')}")
        print(f"{colorize(underline, 'cyan')}\n")
    else:
        print(f"\n{TITLE}")
        print(f"{underline}\n")


def _print_listing(routes: Sequence[Route], *, hierarchical: bool, use_colors: bool) -> None:
    if hierarchical:
        print(render(build_hierarchy(routes), use_colors=use_colors))
        return
    for route in routes:
        print(format_flat_line(route, use_colors=use_colors))


def print_routes(routes: Sequence[Route], config: DiagramConfig | None = None) -> None:
    """Print a text diagram of *routes*; save it when ``output_file`` is set."""
    config = config or DiagramConfig()
    if not routes:
        print(NO_ROUTES)
        return

    diagram = generate_text_diagram(
        routes,
        hierarchical=config.hierarchical,
        use_colors=config.color_output,
    )
    print(diagram)
    if config.output_file:
        save_diagram(diagram, config.output_file)


def print_route_listing(
    routes: Sequence[Route],
    config: DiagramConfig,
    *,
    use_colors: bool = True,
) -> None:
    """Header, listing and total: the console form used by the middleware and CLI."""
    _print_header(use_colors)
    _print_listing(routes, hierarchical=config.hierarchical, use_colors=use_colors)
    reset = COLORS["reset"] if use_colors else ""
    print(f"\n{reset}Total routes: {len(routes)}")


def print_app_routes(
    app: Any,
    config: DiagramConfig | None = None,
    *,
    use_colors: bool = True,
) -> list[Route]:
    """Extract, filter, print and save the routes of *app*.

    Args:
        app: Anything ``routemap.extract.extract`` accepts.
        config: Filtering and output options. Defaults to ``DiagramConfig()``.
        use_colors: ANSI colors on the console. The saved file follows
            ``config.color_output`` instead.

    Returns:
        The filtered routes.
    """
    config = config or DiagramConfig()
    routes = filter_routes(extract(app, include_head=config.include_head), config.exclude_patterns)

    if config.log_to_console:
        print_route_listing(routes, config, use_colors=use_colors)

    if config.output_file:
        diagram = generate_text_diagram(
            routes,
            hierarchical=config.hierarchical,
            use_colors=config.color_output,
        )
        save_diagram(diagram, config.output_file)

    return routes
