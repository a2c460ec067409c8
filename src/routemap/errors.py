"""routemap exception hierarchy.

The extraction core never lets these escape for malformed input; they
mark the narrow seams where a best-effort step can fail and be recovered.
"""


class RouteMapError(Exception):
    """Base for all routemap-specific errors."""


class ConfigurationError(RouteMapError):
    """Raised when a ``DiagramConfig`` value is invalid."""


class PatternReversalError(RouteMapError):
    """Raised when a compiled path matcher cannot be turned back into a path.

    Carries the pattern source so the caller can report it.
    """

    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Cannot reverse pattern {source!r}" + (f": {detail}" if detail else ""))


class AppResolutionError(RouteMapError):
    """Raised by the CLI when an import string does not lead to an object."""
