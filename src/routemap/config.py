"""Diagram configuration.

DiagramConfig is a frozen dataclass shared by the printers, the middleware
and the CLI.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from routemap.errors import ConfigurationError

ExcludePattern: TypeAlias = str | re.Pattern[str]


@dataclass(frozen=True, slots=True)
class DiagramConfig:
    """How routes are filtered, printed, saved and served.

    All fields have sensible defaults. Override what you need::

        config = DiagramConfig(output_file="routes.txt", exclude_patterns=("/static",))
    """

    # Console
    log_to_console: bool = True
    hierarchical: bool = True

    # File output
    output_file: str | Path | None = None
    color_output: bool = False  # ANSI codes in the saved file

    # Filtering
    exclude_patterns: tuple[ExcludePattern, ...] = ()
    include_head: bool = False  # Keep the HEAD that Starlette adds next to GET

    # Web diagram
    generate_web: bool = False
    web_route: str = "/routemap"

    def __post_init__(self) -> None:
        route = self.web_route.strip().strip("/")
        if not route:
            msg = f"web_route must name a path below '/', got {self.web_route!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "web_route", f"/{route}")
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

    @property
    def data_route(self) -> str:
        """JSON endpoint served next to the HTML diagram."""
        return f"{self.web_route}-data"
