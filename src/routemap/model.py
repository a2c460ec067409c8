"""Route record and the per-run table that merges registrations into it."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

ROOT_PATH = "/"


@dataclass(frozen=True, slots=True)
class Route:
    """One normalized path with its merged methods and handler names.

    Created by ``RouteTable.routes()`` at the end of an extraction run.
    """

    path: str
    methods: frozenset[str]
    middleware: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON interchange form: ``{path, methods, middleware}``."""
        return {
            "path": self.path,
            "methods": sorted(self.methods),
            "middleware": list(self.middleware),
        }


def normalize_path(path: str) -> str:
    """Strip a single trailing separator unless *path* is the root.

    ``"/users/"`` -> ``"/users"``, ``"/"`` -> ``"/"``, ``""`` -> ``"/"``.
    """
    if not path:
        return ROOT_PATH
    if path != ROOT_PATH and path.endswith("/"):
        return path[:-1]
    return path


class _Entry:
    """Mutable accumulator for one path. Lives only inside a RouteTable."""

    __slots__ = ("methods", "middleware")

    def __init__(self) -> None:
        self.methods: set[str] = set()
        self.middleware: list[str] = []


class RouteTable:
    """Upsert-by-path collection used during a single extraction run.

    Usage::

        table = RouteTable()
        table.add("/users/", "GET", ["list_users"])
        table.add("/users", "POST", ["create_user"])
        table.routes()
        # [Route(path="/users", methods={"GET", "POST"}, middleware=("list_users", "create_user"))]
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        # Insertion order is the walk order
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, path: str, method: str | None, middleware: Iterable[str] = ()) -> None:
        """Merge one registration into the table.

        A ``None`` method records the path without adding a method.
        """
        key = normalize_path(path)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        if method:
            entry.methods.add(method.upper())
        for name in middleware:
            if name not in entry.middleware:
                entry.middleware.append(name)

    def routes(self) -> list[Route]:
        """Freeze the table into Route records, in first-registration order."""
        return [
            Route(path=path, methods=frozenset(entry.methods), middleware=tuple(entry.middleware))
            for path, entry in self._entries.items()
        ]
