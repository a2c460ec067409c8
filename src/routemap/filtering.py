"""Exclude routes by substring or regular expression."""

import re
from collections.abc import Iterable, Sequence

from routemap.config import ExcludePattern
from routemap.model import Route

# CLI values with this prefix are compiled as regular expressions
REGEX_PREFIX = "re:"


def _excluded(path: str, pattern: ExcludePattern) -> bool:
    if isinstance(pattern, str):
        return pattern in path
    if isinstance(pattern, re.Pattern):
        return pattern.search(path) is not None
    return False


def filter_routes(routes: Sequence[Route], patterns: Iterable[ExcludePattern] | None) -> list[Route]:
    """Drop routes whose path contains a string pattern or matches a regex.

    Order is preserved. No patterns means every route is kept.
    """
    patterns = tuple(patterns or ())
    if not patterns:
        return list(routes)
    return [route for route in routes if not any(_excluded(route.path, p) for p in patterns)]


def compile_patterns(values: Iterable[str]) -> tuple[ExcludePattern, ...]:
    """Turn CLI ``--exclude`` values into patterns.

    ``"re:^/admin"`` becomes a compiled regex, anything else a substring.
    Raises ``re.error`` for an invalid expression.
    """
    compiled: list[ExcludePattern] = []
    for value in values:
        if value.startswith(REGEX_PREFIX):
            compiled.append(re.compile(value[len(REGEX_PREFIX) :]))
        else:
            compiled.append(value)
    return tuple(compiled)
