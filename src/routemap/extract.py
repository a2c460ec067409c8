"""Walk a Starlette routing table into a flat, merged list of routes.

The walk is read-only: it never mutates the application it inspects, and
it never raises for malformed or partial input. Anything it cannot make
sense of is logged on the ``routemap.extract`` logger and skipped, so
callers always get a (possibly empty) list back.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from routemap.errors import PatternReversalError
from routemap.layers import MountedApp, SubRouter, TerminalRoute, Unroutable, classify, mounted_app
from routemap.model import ROOT_PATH, Route, RouteTable
from routemap.patterns import MATCH_ANY_PATTERN, pattern_to_path, template_to_path

logger = logging.getLogger("routemap.extract")

# Middleware wrappers (``app.app.app...``) followed before giving up
_MAX_UNWRAP_DEPTH = 16

# Nested tables deeper than this are assumed to be a cycle
_MAX_NESTING = 64


def _router_routes(app: Any) -> Any:
    router = getattr(app, "router", None)
    return getattr(router, "routes", None) if router is not None else None


def _direct_routes(app: Any) -> Any:
    return getattr(app, "routes", None)


def _wrapped_routes(app: Any) -> Any:
    # ASGI middleware keeps the next app on ``.app``
    inner = getattr(app, "app", None)
    for _ in range(_MAX_UNWRAP_DEPTH):
        if inner is None:
            return None
        routes = _router_routes(inner) or _direct_routes(inner)
        if _is_layer_sequence(routes) and routes:
            return routes
        inner = getattr(inner, "app", None)
    return None


# Where an application keeps its routing table, highest priority first:
# Starlette/FastAPI expose ``router.routes``, a bare Router exposes ``routes``,
# and an app wrapped in ASGI middleware hides either behind ``.app``.
ATTACHMENT_POINTS: tuple[tuple[str, Callable[[Any], Any]], ...] = (
    ("router.routes", _router_routes),
    ("routes", _direct_routes),
    ("app", _wrapped_routes),
)


def _is_layer_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def locate_layers(app: Any) -> Sequence[Any] | None:
    """Return the first non-empty routing table found on *app*, or ``None``."""
    for name, probe in ATTACHMENT_POINTS:
        try:
            layers = probe(app)
        except Exception:
            logger.debug("Attachment point %r raised on %r", name, app, exc_info=True)
            continue
        if _is_layer_sequence(layers) and layers:
            logger.debug("Routing table found at %r", name)
            return layers
    return None


def _has_empty_table(app: Any) -> bool:
    # A real routing table with nothing registered in it yet
    for _, probe in ATTACHMENT_POINTS[:2]:
        try:
            layers = probe(app)
        except Exception:
            continue
        if _is_layer_sequence(layers) and not layers:
            return True
    return False


def _is_factory(app: Any) -> bool:
    return inspect.isfunction(app) or inspect.ismethod(app)


def _invoke_factory(factory: Callable[[], Any]) -> Any:
    """Call an app factory once. Returns ``None`` if it fails."""
    try:
        result = factory()
    except Exception as exc:
        logger.error("Could not initialize application from %r: %s", factory, exc)
        return None

    if inspect.isawaitable(result):
        close = getattr(result, "close", None)
        if close is not None:
            close()
        logger.error("Application factory %r is asynchronous; pass the application instead", factory)
        return None
    return result


def load_routing_table(app: Any) -> tuple[Any, Sequence[Any]] | None:
    """Resolve *app* to ``(application, routing table)``.

    A plain function without a routing table is treated as an app factory
    and called once with no arguments. A routing table that exists but is
    empty yields ``(app, [])`` with a warning. If the factory fails, or no
    attachment point resolves, the problem is logged and ``None`` is returned.
    """
    if app is None:
        logger.error("Invalid application provided: None")
        return None

    layers = locate_layers(app)
    if layers is None and _is_factory(app):
        built = _invoke_factory(app)
        if built is not None:
            built_layers = locate_layers(built)
            if built_layers is not None:
                return built, built_layers
            if _has_empty_table(built):
                logger.warning("Routing table of %r is empty; no routes registered", built)
                return built, []
            logger.error("Application factory %r returned %r, which has no routing table", app, built)

    if layers is None and _has_empty_table(app):
        logger.warning("Routing table of %r is empty; no routes registered", app)
        return app, []

    if layers is None:
        public = sorted(name for name in dir(app) if not name.startswith("_"))
        logger.error(
            "No routing table found on %r. Make sure it is a Starlette application or Router.",
            app,
        )
        logger.error("Application attributes: %s", ", ".join(public) or "(none)")
        return None

    return app, layers


def layer_prefix(base_path: str, path: str | None, pattern: Any) -> str:
    """Path prefix a nested table consumes, appended to *base_path*.

    The literal path wins. Without one, the compiled pattern is reversed.
    ``MATCH_ANY_PATTERN`` contributes nothing. A failed reversal falls back
    to the literal path if present, else leaves *base_path* unchanged.
    """
    prefix = base_path
    source = getattr(pattern, "pattern", pattern)

    if pattern is not None and source != MATCH_ANY_PATTERN:
        try:
            if path is not None:
                prefix = base_path + template_to_path(path)
            else:
                prefix = base_path + pattern_to_path(pattern)
        except PatternReversalError as exc:
            logger.warning("%s; keeping prefix %r", exc, base_path)
            if path is not None:
                prefix = base_path + template_to_path(path)
    elif pattern is None and path is not None:
        prefix = base_path + template_to_path(path)

    if prefix != ROOT_PATH and prefix.endswith("/"):
        prefix = prefix[:-1]
    return prefix


def _unwrap_nested(layer: Any, nested: Any, prefix: str) -> Any:
    """Nested table of *layer*, looking behind ASGI middleware when it reads empty.

    ``Mount.routes`` only sees the mounted app itself, so an app wrapped in
    middleware reports ``[]`` even when the router inside has routes.
    """
    if not _is_layer_sequence(nested) or nested:
        return nested
    app = mounted_app(layer)
    if getattr(app, "app", None) is None:
        return nested
    found = locate_layers(app)
    if found is None:
        logger.warning("No routing table found behind %r mounted at %r; skipping", app, prefix or ROOT_PATH)
        return nested
    return found


def _walk(
    layers: Any,
    base_path: str,
    table: RouteTable,
    active: set[int],
    *,
    include_head: bool,
) -> None:
    if not _is_layer_sequence(layers):
        logger.warning("Invalid routing table under %r: %r is not a sequence", base_path or ROOT_PATH, layers)
        return

    marker = id(layers)
    if marker in active or len(active) >= _MAX_NESTING:
        logger.warning("Routing table under %r is mounted inside itself; skipping", base_path or ROOT_PATH)
        return
    active.add(marker)

    for layer in layers:
        kind = classify(layer, include_head=include_head)
        match kind:
            case TerminalRoute(path=path, methods=methods, handlers=handlers):
                full_path = base_path + template_to_path(path or "")
                if not methods:
                    table.add(full_path, None, handlers)
                for method in methods:
                    table.add(full_path, method, handlers)
            case SubRouter(path=path, pattern=pattern, layers=nested) | MountedApp(
                path=path, pattern=pattern, layers=nested
            ):
                prefix = layer_prefix(base_path, path, pattern)
                nested = _unwrap_nested(layer, nested, prefix)
                _walk(nested, prefix, table, active, include_head=include_head)
            case Unroutable():
                logger.debug("Skipping layer without routing semantics: %r", layer)

    active.discard(marker)


def collect_routes(layers: Any, base_path: str = "", *, include_head: bool = False) -> list[Route]:
    """Walk a routing table depth-first and merge routes by normalized path.

    *layers* is a sequence of routing-table entries (``Route``, ``Mount``,
    ``Host``, ...). A non-sequence is logged and yields ``[]``.
    """
    table = RouteTable()
    _walk(layers, base_path, table, set(), include_head=include_head)
    return table.routes()


def extract(app: Any, *, include_head: bool = False) -> list[Route]:
    """Extract every route registered on a Starlette application.

    Args:
        app: A ``Starlette``/``FastAPI`` app, a ``Router``, an app wrapped in
            ASGI middleware, or a no-argument factory returning one of those.
        include_head: Keep the ``HEAD`` method Starlette adds next to ``GET``.

    Returns:
        One ``Route`` per normalized path, in registration order. Empty when
        *app* cannot be resolved (the reason is logged).
    """
    located = load_routing_table(app)
    if located is None:
        return []
    _, layers = located
    routes = collect_routes(layers, include_head=include_head)
    logger.debug("Extracted %d routes from %r", len(routes), app)
    return routes
