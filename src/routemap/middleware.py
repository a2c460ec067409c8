"""ASGI middleware that prints the route tree and serves the web diagram.

Wrap any Starlette application::

    from starlette.middleware import Middleware
    from routemap import DiagramConfig, RouteMapMiddleware

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(RouteMapMiddleware, config=DiagramConfig(generate_web=True)),
        ],
    )

On the first HTTP request the routes are extracted, filtered, printed and
(optionally) saved. With ``generate_web``, GET and HEAD requests for the two
diagram paths are served by the middleware itself and never reach the
application.
"""

import logging
from collections.abc import Sequence
from typing import Any

from starlette.responses import HTMLResponse, JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from routemap.colors import console_colors
from routemap.config import DiagramConfig
from routemap.diagram import generate_text_diagram, save_diagram
from routemap.extract import extract
from routemap.filtering import filter_routes
from routemap.model import Route
from routemap.printing import print_route_listing
from routemap.web import render_diagram_page, routes_payload

logger = logging.getLogger("routemap.web")

_BANNER_RULE = "=" * 53

# Methods the diagram paths answer; anything else goes to the wrapped app
_SERVED_METHODS = frozenset({"GET", "HEAD"})


class RouteMapMiddleware:
    """Print routes once and serve ``web_route`` / ``web_route + "-data"``.

    Args:
        app: The wrapped ASGI application.
        config: Output and filtering options.
        routes: Pre-generated routes. When given, nothing is extracted and
            the diagram always shows this snapshot.
    """

    __slots__ = ("_banner_printed", "_processed", "_routes", "app", "config")

    def __init__(
        self,
        app: ASGIApp,
        config: DiagramConfig | None = None,
        *,
        routes: Sequence[Route] | None = None,
    ) -> None:
        self.app = app
        self.config = config or DiagramConfig()
        self._routes = list(routes) if routes is not None else None
        self._processed = False
        self._banner_printed = False

    def announce(self) -> None:
        """Print where the diagram is served. Once per middleware instance."""
        if self._banner_printed or not self.config.generate_web:
            return
        self._banner_printed = True
        print(f"\n{_BANNER_RULE}")
        print(f"ROUTE DIAGRAM AVAILABLE AT: {self.config.web_route}")
        print(f"ROUTE JSON DATA AVAILABLE AT: {self.config.data_route}")
        print(f"{_BANNER_RULE}\n")

    def current_routes(self, host_app: Any) -> list[Route]:
        """Filtered routes: the snapshot if one was given, else a fresh extraction."""
        if self._routes is not None:
            routes = self._routes
        else:
            routes = extract(host_app, include_head=self.config.include_head)
        return filter_routes(routes, self.config.exclude_patterns)

    def _process(self, host_app: Any) -> None:
        self._processed = True
        self.announce()
        routes = self.current_routes(host_app)

        if self.config.log_to_console:
            print_route_listing(routes, self.config, use_colors=console_colors())

        if self.config.output_file:
            diagram = generate_text_diagram(
                routes,
                hierarchical=self.config.hierarchical,
                use_colors=self.config.color_output,
            )
            save_diagram(diagram, self.config.output_file)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Starlette stores the application on the scope before middleware runs
        host_app = scope.get("app") or self.app
        if not self._processed:
            self._process(host_app)

        path = scope.get("path", "")
        if (
            self.config.generate_web
            and path in (self.config.web_route, self.config.data_route)
            and scope.get("method", "GET") in _SERVED_METHODS
        ):
            routes = self.current_routes(host_app)
            if path == self.config.data_route:
                response: JSONResponse | HTMLResponse = JSONResponse(routes_payload(routes))
            else:
                response = HTMLResponse(
                    render_diagram_page(routes, data_route=self.config.data_route)
                )
            logger.debug("Served %s with %d routes", path, len(routes))
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
