"""Path templates and compiled path matchers -> literal ``:name`` paths.

Two conversions live here:

- ``template_to_path`` turns a Starlette template (``/users/{id:int}``)
  into the ``:name`` form (``/users/:id``).
- ``pattern_to_path`` reverses a compiled matcher back into a literal
  prefix. This is best-effort text surgery on the regex source, driven by
  ``REVERSAL_RULES`` in order. Anything the table does not recognise raises
  ``PatternReversalError`` instead of guessing.
"""

import re

from routemap.errors import PatternReversalError

# Starlette's {name} / {name:convertor} placeholder
TEMPLATE_PARAM = re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)(?::[a-zA-Z_][a-zA-Z0-9_]*)?\}")

# Pattern of ``Mount("")``: consumes whatever follows the root. Contributes no prefix.
MATCH_ANY_PATTERN = r"^/(?P<path>.*)$"

# Regex bodies of the built-in convertors (str, path, int, float, uuid)
CONVERTOR_BODIES: tuple[str, ...] = (
    r"[^/]+",
    r".*",
    r"[0-9]+",
    r"[0-9]+(\.[0-9]+)?",
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
)

# (rule, replacement), applied top to bottom
REVERSAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Inline case-insensitivity and other flag groups
    (re.compile(r"\(\?[aiLmsux]+\)"), ""),
    # Anchors
    (re.compile(r"^\^"), ""),
    (re.compile(r"(?:\$|\\Z)$"), ""),
    # Remainder consumed by a mount: /{path:path}
    (re.compile(r"\\?/?\(\?P<path>\.\*\)$"), ""),
    # Named captures with a known convertor body
    *(
        (re.compile(r"\(\?P<(\w+)>" + re.escape(body) + r"\)"), r":\1")
        for body in CONVERTOR_BODIES
    ),
    # Named captures with any flat body
    (re.compile(r"\(\?P<(\w+)>[^()]*\)"), r":\1"),
    # Bare parameter captures: (?:([^/]+?)) and ([^/]+?)
    (re.compile(r"\(\?:\(\[\^\\?/\]\+\??\)\)"), ":param"),
    (re.compile(r"\(\[\^\\?/\]\+\??\)"), ":param"),
    # Lookaheads such as (?=/|$)
    (re.compile(r"\(\?=[^()]*\)"), ""),
    # Optional groups (?:...)?
    (re.compile(r"\(\?:[^()]*\)\?"), ""),
    # Optional trailing separator
    (re.compile(r"\\?/\?$"), ""),
    # Wildcard capture
    (re.compile(r"\(\.\*\)"), "*"),
    # Escaped characters, separators included
    (re.compile(r"\\(.)"), r"\1"),
    # Doubled separators
    (re.compile(r"/{2,}"), "/"),
)

# Characters that mean the table missed part of the pattern
_RESIDUE = re.compile(r"[()\[\]{}|^$+?\\]")


def template_to_path(template: str) -> str:
    """Convert ``{name}`` / ``{name:convertor}`` placeholders to ``:name``.

    Templates already written with ``:name`` pass through unchanged.
    """
    return TEMPLATE_PARAM.sub(r":\1", template)


def pattern_to_path(pattern: re.Pattern[str] | str) -> str:
    """Recover the literal path prefix a compiled matcher was built from.

    Examples::

        "^/api/(?P<path>.*)$"                   -> "/api"
        "^/users/(?P<user_id>[0-9]+)/(?P<path>.*)$" -> "/users/:user_id"
        "^/(?P<path>.*)$"                       -> ""   (MATCH_ANY_PATTERN)

    Raises ``PatternReversalError`` when the source is not a string pattern
    or still contains regex syntax after every rule has been applied.
    """
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    if not isinstance(source, str):
        msg = f"expected a str pattern, got {type(source).__name__}"
        raise PatternReversalError(repr(source), msg)

    if source == MATCH_ANY_PATTERN:
        return ""

    path = source
    for rule, replacement in REVERSAL_RULES:
        path = rule.sub(replacement, path)

    leftover = _RESIDUE.search(path)
    if leftover is not None:
        raise PatternReversalError(source, f"unrecognised syntax {leftover.group()!r} in {path!r}")
    return path
