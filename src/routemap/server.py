"""Standalone diagram server for ``routemap serve``.

Builds a tiny Starlette app whose only job is serving a pre-generated
route snapshot through ``RouteMapMiddleware``.
"""

from collections.abc import Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware

from routemap.config import DiagramConfig
from routemap.middleware import RouteMapMiddleware
from routemap.model import Route


def build_diagram_app(routes: Sequence[Route], config: DiagramConfig) -> Starlette:
    """Starlette app that answers only ``config.web_route`` and its data route."""
    return Starlette(
        middleware=[Middleware(RouteMapMiddleware, config=config, routes=list(routes))],
    )


def run_diagram_server(
    routes: Sequence[Route],
    *,
    host: str = "127.0.0.1",
    port: int = 3000,
    web_route: str = "/routemap",
) -> None:
    """Serve the diagram with uvicorn until interrupted.

    Requires the ``server`` extra (``pip install routemap[server]``).
    """
    try:
        import uvicorn
    except ImportError as exc:
        msg = "routemap serve requires uvicorn. Install it with: pip install routemap[server]"
        raise RuntimeError(msg) from exc

    config = DiagramConfig(generate_web=True, log_to_console=False, web_route=web_route)
    app = build_diagram_app(routes, config)
    print(f"Route diagram server started on port {port}")
    print(f"View the route diagram at http://{host}:{port}{config.web_route}")
    uvicorn.run(app, host=host, port=port)
