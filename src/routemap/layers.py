"""Classify one routing-table entry into a tagged variant.

Starlette's routing table is a list of ``BaseRoute`` objects whose concrete
shape varies: ``Route`` and ``WebSocketRoute`` are endpoints, ``Mount`` and
``Host`` carry a nested table, and a nested table may belong to a bare
``Router`` or to a whole application. ``classify`` inspects the shape once
and returns a variant carrying only the fields the walk needs, so the walk
itself never inspects attributes.
"""

import inspect
import re
from dataclasses import dataclass
from typing import Any, TypeAlias

# Verbs a class-based endpoint may implement, in display order
HTTP_METHODS: tuple[str, ...] = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

# Method token reported for websocket endpoints
WEBSOCKET_METHOD = "WS"

# Placeholder for handlers without a usable name
ANONYMOUS = "<anonymous>"

# Guard against self-referencing middleware wrappers
_MAX_WRAPPER_DEPTH = 32

_MISSING = object()


@dataclass(frozen=True, slots=True)
class TerminalRoute:
    """An endpoint: a path template plus the methods it answers."""

    path: str | None
    methods: tuple[str, ...]
    handlers: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SubRouter:
    """A nested routing table grafted under a prefix (``Mount(routes=...)``)."""

    path: str | None
    pattern: re.Pattern[str] | str | None
    layers: Any


@dataclass(frozen=True, slots=True)
class MountedApp:
    """A whole application grafted under a prefix (``Mount(app=Starlette())``)."""

    path: str | None
    pattern: re.Pattern[str] | str | None
    layers: Any
    app: Any


@dataclass(frozen=True, slots=True)
class Unroutable:
    """Anything without routing semantics. Skipped by the walk."""

    layer: Any


Layer: TypeAlias = TerminalRoute | SubRouter | MountedApp | Unroutable


def classify(layer: Any, *, include_head: bool = False) -> Layer:
    """Inspect *layer* and return the variant it belongs to.

    Nested tables are checked first: ``Mount`` exposes both ``routes`` and a
    ``path``, while endpoints never expose ``routes``.
    """
    nested = getattr(layer, "routes", None)
    if nested is not None:
        path = _literal_path(layer)
        pattern = getattr(layer, "path_regex", None)
        base_app = mounted_app(layer)
        if base_app is not None and getattr(base_app, "router", None) is not None:
            return MountedApp(path=path, pattern=pattern, layers=nested, app=base_app)
        return SubRouter(path=path, pattern=pattern, layers=nested)

    endpoint = getattr(layer, "endpoint", None)
    path = _literal_path(layer)
    if endpoint is not None and path is not None:
        return TerminalRoute(
            path=path,
            methods=resolve_methods(layer, endpoint, include_head=include_head),
            handlers=handler_names(layer, endpoint),
        )

    return Unroutable(layer=layer)


def resolve_methods(layer: Any, endpoint: Any, *, include_head: bool = False) -> tuple[str, ...]:
    """Method tokens an endpoint layer answers, uppercase and de-duplicated.

    - ``methods`` set on the layer: used as-is.
    - ``methods`` is ``None`` (class-based endpoint): the verbs the class defines.
    - a singular ``method`` field: that one method.
    - no method field at all: a websocket route.

    Starlette registers ``HEAD`` alongside every ``GET``. It is dropped
    unless *include_head* is set.
    """
    declared = getattr(layer, "methods", _MISSING)
    if declared is _MISSING:
        single = getattr(layer, "method", None)
        if isinstance(single, str) and single:
            return (single.upper(),)
        return (WEBSOCKET_METHOD,)

    if declared is None:
        if not inspect.isclass(endpoint):
            return ()
        methods = [m for m in HTTP_METHODS if callable(getattr(endpoint, m.lower(), None))]
    else:
        methods = []
        for method in declared:
            token = str(method).upper()
            if token not in methods:
                methods.append(token)

    if not include_head and "GET" in methods and "HEAD" in methods:
        methods.remove("HEAD")
    return tuple(sorted(methods))


def handler_names(layer: Any, endpoint: Any) -> tuple[str, ...]:
    """Route-level middleware (outermost first), then the endpoint itself."""
    names: list[str] = []
    wrapper = getattr(layer, "app", None)
    depth = 0
    while (
        wrapper is not None
        and wrapper is not endpoint
        and hasattr(wrapper, "app")
        and depth < _MAX_WRAPPER_DEPTH
    ):
        names.append(type(wrapper).__name__)
        wrapper = wrapper.app
        depth += 1
    names.append(callable_name(endpoint))
    return tuple(names)


def callable_name(obj: Any) -> str:
    """Readable name of a handler, or ``ANONYMOUS``."""
    name = getattr(obj, "__name__", None)
    if isinstance(name, str) and name:
        return ANONYMOUS if name == "<lambda>" else name
    if inspect.isfunction(obj) or obj is None:
        return ANONYMOUS
    # Callable instances are named after their class
    return type(obj).__name__


def _literal_path(layer: Any) -> str | None:
    path = getattr(layer, "path", None)
    return path if isinstance(path, str) else None


def mounted_app(layer: Any) -> Any:
    """The application a nested layer grafts in.

    ``Mount`` keeps it on ``_base_app`` when route-level middleware wraps ``app``.
    """
    return getattr(layer, "_base_app", None) or getattr(layer, "app", None)
