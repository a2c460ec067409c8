"""Plain-text route diagrams and saving them to disk."""

import logging
from collections.abc import Sequence
from pathlib import Path

from routemap.colors import colorize_methods
from routemap.hierarchy import NO_ROUTES, build_hierarchy, render
from routemap.model import Route

logger = logging.getLogger("routemap.diagram")

TITLE = "ROUTES"
UNKNOWN_METHOD = "UNKNOWN"


def _flat_key(route: Route) -> tuple[str, str]:
    methods = sorted(route.methods)
    return route.path, methods[0] if methods else ""


def format_flat_line(route: Route, *, use_colors: bool = False) -> str:
    """One line of the flat listing: ``[GET, POST] /users``."""
    methods = sorted(route.methods)
    if not methods:
        label = UNKNOWN_METHOD
    elif use_colors:
        label = colorize_methods(methods)
    else:
        label = ", ".join(methods)
    return f"[{label}] {route.path}"


def generate_text_diagram(
    routes: Sequence[Route],
    *,
    hierarchical: bool = True,
    use_colors: bool = False,
) -> str:
    """Title, route listing and total, as a single string.

    Hierarchical by default; ``hierarchical=False`` lists one route per
    line sorted by path, then by first method.
    """
    parts = [TITLE, "=" * len(TITLE), ""]

    if not routes:
        parts.append(NO_ROUTES)
        return "\n".join(parts) + "\n"

    if hierarchical:
        parts.append(render(build_hierarchy(routes), use_colors=use_colors))
    else:
        parts.extend(format_flat_line(r, use_colors=use_colors) for r in sorted(routes, key=_flat_key))

    parts.append("")
    parts.append(f"Total routes: {len(routes)}")
    return "\n".join(parts) + "\n"


def save_diagram(diagram: str, output_path: str | Path) -> bool:
    """Write *diagram* to *output_path* as UTF-8.

    Returns ``False`` (and logs why) when the file cannot be written.
    """
    target = Path(output_path).resolve()
    try:
        target.write_text(diagram, encoding="utf-8")
    except OSError as exc:
        logger.error("Error saving diagram to %s: %s", target, exc)
        return False
    logger.info("Diagram saved to %s", target)
    return True
