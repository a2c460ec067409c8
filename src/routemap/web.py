"""Web diagram: a self-contained HTML page plus a JSON data endpoint.

The page is rendered with plain f-strings, no template engine. It shows
the text tree and embeds the route list as JSON for scripts that want to
draw something richer.
"""

import html
import json
import logging
from collections.abc import Sequence
from typing import Any

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route as StarletteRoute

from routemap.config import DiagramConfig
from routemap.extract import extract
from routemap.hierarchy import build_hierarchy, render
from routemap.model import Route

logger = logging.getLogger("routemap.web")

_PAGE_STYLE = """
body { font-family: ui-monospace, SFMono-Regular, Menlo, monospace; margin: 2rem;
       background: #1e1e2e; color: #cdd6f4; }
h1 { font-size: 1.25rem; color: #89dceb; }
a { color: #89b4fa; }
pre { background: #181825; padding: 1rem 1.5rem; border-radius: 6px; line-height: 1.4; }
.total { color: #a6adc8; }
"""


def routes_payload(routes: Sequence[Route]) -> list[dict[str, Any]]:
    """JSON interchange form: ``[{path, methods, middleware}, ...]``."""
    return [route.to_dict() for route in routes]


def _script_json(data: Any) -> str:
    # "</" would close the <script> element early
    return json.dumps(data).replace("</", "<\\/")


def render_diagram_page(
    routes: Sequence[Route],
    *,
    title: str = "Routes",
    data_route: str | None = None,
) -> str:
    """Render the diagram page for *routes* as a complete HTML document."""
    tree = html.escape(render(build_hierarchy(list(routes))))
    data_link = (
        f'<p><a href="{html.escape(data_route, quote=True)}">JSON data</a></p>' if data_route else ""
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>{_PAGE_STYLE}</style>\n"
        "</head>\n<body>\n"
        f"<h1>{html.escape(title)}</h1>\n"
        f"{data_link}\n"
        f'<pre id="route-tree">{tree}</pre>\n'
        f'<p class="total">Total routes: {len(routes)}</p>\n'
        f'<script type="application/json" id="routes-data">{_script_json(routes_payload(routes))}</script>\n'
        "</body>\n</html>\n"
    )


def setup_web_route(app: Any, routes: Sequence[Route], web_route: str = "/routemap") -> None:
    """Add the diagram page and its ``-data`` JSON endpoint to a Starlette app.

    Both routes go to the front of the routing table so a catch-all mount
    cannot shadow them.
    """
    config = DiagramConfig(web_route=web_route)
    snapshot = list(routes)

    async def routemap_data(request: Request) -> JSONResponse:
        logger.info("Route data requested at %s", config.data_route)
        return JSONResponse(routes_payload(snapshot))

    async def routemap_page(request: Request) -> HTMLResponse:
        logger.info("Route diagram requested at %s", config.web_route)
        return HTMLResponse(render_diagram_page(snapshot, data_route=config.data_route))

    app.router.routes[0:0] = [
        StarletteRoute(config.data_route, routemap_data, methods=["GET"], name="routemap-data"),
        StarletteRoute(config.web_route, routemap_page, methods=["GET"], name="routemap"),
    ]
    logger.info("Route diagram available at %s", config.web_route)
    logger.info("Route data available at %s", config.data_route)


def generate_routes_on_startup(app: Any) -> list[Route]:
    """Extract *app*'s routes once, for serving a fixed snapshot."""
    routes = extract(app)
    logger.info("Generated %d routes for the web diagram", len(routes))
    return routes
