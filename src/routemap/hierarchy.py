"""Prefix tree of routes keyed by path segment, and its text rendering.

Routes are sorted by path and split on ``/``. Each segment becomes a child
node; the route is attached to the node of its last segment. The root path
``/`` bypasses splitting and lives on the top-level node itself, presented
under the reserved key ``root``.

Parameter segments (``:id``) map to a *list* of candidate subtrees rather
than a single node. Descent always uses the first candidate, so two routes
binding different downstream shapes at the same parameter position share
one subtree.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from routemap.colors import colorize_methods
from routemap.model import ROOT_PATH, Route

logger = logging.getLogger("routemap.hierarchy")

ROOT_KEY = "root"
PARAM_PREFIX = ":"
NO_ROUTES = "No routes found"

# Tree drawing
BRANCH = "├─ "
LAST_BRANCH = "└─ "
CONTINUATION = "│ "


@dataclass(slots=True)
class HierarchyNode:
    """One node of the segment tree.

    ``routes`` holds the routes ending here; ``children`` maps a segment to
    its node, or to a list of candidate nodes for parameter segments.
    """

    routes: list[Route] = field(default_factory=list)
    children: dict[str, HierarchyNode | list[HierarchyNode]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.routes and not self.children

    def child(self, key: str) -> HierarchyNode | None:
        """The node under *key*; the first candidate for parameter segments."""
        return _first(self.children.get(key))

    def methods(self) -> list[str]:
        """Sorted union of the methods of every route attached here."""
        found: set[str] = set()
        for route in self.routes:
            found.update(route.methods)
        return sorted(found)

    def to_dict(self) -> dict[str, Any]:
        """JSON/visual form of the tree.

        Leaves become lists of route dicts, branches become mappings (with
        ``_routes`` when the branch also ends routes), parameter segments
        become lists of candidates. Root routes sit under ``root``.
        """
        result: dict[str, Any] = {key: _node_form(value) for key, value in self.children.items()}
        if self.routes:
            result[ROOT_KEY] = [route.to_dict() for route in self.routes]
        return result


def _first(value: HierarchyNode | list[HierarchyNode] | None) -> HierarchyNode | None:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _node_form(value: HierarchyNode | list[HierarchyNode]) -> Any:
    if isinstance(value, list):
        return [_node_form(candidate) for candidate in value]
    if not value.children:
        return [route.to_dict() for route in value.routes]
    form: dict[str, Any] = {key: _node_form(child) for key, child in value.children.items()}
    if value.routes:
        form["_routes"] = [route.to_dict() for route in value.routes]
    return form


def _descend(node: HierarchyNode, segment: str) -> HierarchyNode:
    """Child of *node* for *segment*, created if absent."""
    existing = node.children.get(segment)

    if segment.startswith(PARAM_PREFIX):
        if isinstance(existing, list):
            if not existing:
                existing.append(HierarchyNode())
            return existing[0]
        candidate = existing if existing is not None else HierarchyNode()
        node.children[segment] = [candidate]
        return candidate

    if isinstance(existing, list):
        if not existing:
            existing.append(HierarchyNode())
        return existing[0]
    if existing is None:
        existing = node.children[segment] = HierarchyNode()
    return existing


def build_hierarchy(routes: Sequence[Route]) -> HierarchyNode:
    """Organize *routes* into a segment tree.

    A non-sequence is logged and treated as empty. Entries without a string
    ``path`` are skipped.
    """
    hierarchy = HierarchyNode()
    if not isinstance(routes, Sequence) or isinstance(routes, (str, bytes)):
        logger.warning("Expected a sequence of routes, got %r; treating as empty", type(routes).__name__)
        return hierarchy

    valid = [route for route in routes if isinstance(getattr(route, "path", None), str)]
    if len(valid) != len(routes):
        logger.warning("Skipped %d entries without a path", len(routes) - len(valid))

    for route in sorted(valid, key=lambda r: r.path):
        segments = [segment for segment in route.path.split("/") if segment]
        if route.path == ROOT_PATH or not segments:
            hierarchy.routes.append(route)
            continue

        node = hierarchy
        for segment in segments:
            node = _descend(node, segment)
        node.routes.append(route)

    return hierarchy


def _format_methods(methods: list[str], use_colors: bool) -> str:
    if use_colors:
        return colorize_methods(methods)
    return ", ".join(methods)


def line_prefix(level: int, is_last: bool) -> str:
    """Tree-drawing prefix: one continuation per ancestor below the top, then the branch."""
    if level == 0:
        return ""
    return CONTINUATION * (level - 1) + (LAST_BRANCH if is_last else BRANCH)


def _render_node(
    key: str,
    value: HierarchyNode | list[HierarchyNode],
    lines: list[str],
    *,
    level: int,
    is_last: bool,
    use_colors: bool,
) -> None:
    node = _first(value)
    line = f"{line_prefix(level, is_last)}{key}"
    methods = node.methods() if node is not None else []
    if methods:
        line += f" [{_format_methods(methods, use_colors)}]"
    lines.append(line)

    if node is None or not node.children:
        return

    keys = sorted(node.children)
    for index, child_key in enumerate(keys):
        _render_node(
            child_key,
            node.children[child_key],
            lines,
            level=level + 1,
            is_last=index == len(keys) - 1,
            use_colors=use_colors,
        )


def render(hierarchy: HierarchyNode | None, *, use_colors: bool = False) -> str:
    """Render *hierarchy* as an indented tree, one line per node.

    Children are visited in ordinal key order, so the output is the same
    for the same set of routes whatever order they arrived in. Colors only
    insert ANSI sequences around method names.
    """
    if hierarchy is None or hierarchy.is_empty:
        return NO_ROUTES

    top: dict[str, HierarchyNode | list[HierarchyNode]] = dict(hierarchy.children)
    if hierarchy.routes:
        # A literal /root path and the root slot share a key; keep both lines
        root_leaf = HierarchyNode(routes=list(hierarchy.routes))
        entries = sorted([*top.items(), (ROOT_KEY, root_leaf)], key=lambda item: item[0])
    else:
        entries = sorted(top.items(), key=lambda item: item[0])

    lines: list[str] = []
    for index, (key, value) in enumerate(entries):
        _render_node(
            key,
            value,
            lines,
            level=0,
            is_last=index == len(entries) - 1,
            use_colors=use_colors,
        )
    return "\n".join(lines)
