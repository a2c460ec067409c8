"""routemap — draw the route tree of a Starlette application.

Walks the application's routing table (nested routers, mounted apps,
compiled path matchers) and produces one canonical record per path.

Basic usage::

    from routemap import extract, build_hierarchy, render

    routes = extract(app)
    print(render(build_hierarchy(routes), use_colors=True))

As middleware (``pip install routemap``)::

    from starlette.middleware import Middleware
    from routemap import DiagramConfig, RouteMapMiddleware

    app = Starlette(
        routes=[...],
        middleware=[Middleware(RouteMapMiddleware, config=DiagramConfig(generate_web=True))],
    )
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DiagramConfig",
    "HierarchyNode",
    "PatternReversalError",
    "Route",
    "RouteMapError",
    "RouteMapMiddleware",
    "build_hierarchy",
    "extract",
    "filter_routes",
    "generate_text_diagram",
    "print_app_routes",
    "render",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routemap`` free of starlette imports until needed.
    """
    if name == "extract":
        from routemap.extract import extract

        return extract

    if name == "Route":
        from routemap.model import Route

        return Route

    if name in ("HierarchyNode", "build_hierarchy", "render"):
        from routemap import hierarchy as _hierarchy

        return getattr(_hierarchy, name)

    if name == "filter_routes":
        from routemap.filtering import filter_routes

        return filter_routes

    if name == "generate_text_diagram":
        from routemap.diagram import generate_text_diagram

        return generate_text_diagram

    if name == "print_app_routes":
        from routemap.printing import print_app_routes

        return print_app_routes

    if name == "DiagramConfig":
        from routemap.config import DiagramConfig

        return DiagramConfig

    if name == "RouteMapMiddleware":
        from routemap.middleware import RouteMapMiddleware

        return RouteMapMiddleware

    if name in ("ConfigurationError", "PatternReversalError", "RouteMapError"):
        from routemap import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
