"""routemap CLI — print, export or serve the route tree of a Starlette app.

Entry point registered as ``routemap`` in ``pyproject.toml``::

    [project.scripts]
    routemap = "routemap.cli:main"
"""

import argparse
import logging
import sys


def _add_app_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "app",
        help="Import string or file (e.g. myapp:app, ./main.py:create_app)",
    )


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Hide routes containing PATTERN (prefix with 're:' for a regex). Repeatable.",
    )
    parser.add_argument(
        "--include-head",
        action="store_true",
        help="Keep the HEAD method Starlette adds to every GET route",
    )


def _configure_logging(verbose: bool) -> None:
    # Without -v, warnings reach stderr through logging's last-resort handler
    if verbose:
        logging.basicConfig(format="%(levelname)s: %(name)s: %(message)s")
        logging.getLogger("routemap").setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routemap`` command."""
    parser = argparse.ArgumentParser(
        prog="routemap",
        description="routemap — draw the route tree of a Starlette application.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")
    subparsers = parser.add_subparsers(dest="command")

    # -- routemap print ---------------------------------------------------
    print_parser = subparsers.add_parser("print", help="Print the route tree")
    _add_app_argument(print_parser)
    _add_filter_arguments(print_parser)
    print_parser.add_argument("-o", "--output", default=None, help="Also save the diagram to a file")
    print_parser.add_argument(
        "--color-file",
        action="store_true",
        help="Keep ANSI color codes in the output file",
    )
    print_parser.add_argument(
        "--flat",
        action="store_true",
        help="One line per route instead of a tree",
    )
    print_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors on the console",
    )

    # -- routemap json ----------------------------------------------------
    json_parser = subparsers.add_parser("json", help="Print routes as JSON")
    _add_app_argument(json_parser)
    _add_filter_arguments(json_parser)
    json_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    json_parser.add_argument(
        "--tree",
        action="store_true",
        help="Emit the segment tree instead of the flat list",
    )

    # -- routemap serve ---------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve the route diagram over HTTP")
    _add_app_argument(serve_parser)
    _add_filter_arguments(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=3000, help="Bind port number")
    serve_parser.add_argument(
        "--diagram-route",
        default="/routemap",
        help="Path of the diagram page (default: /routemap)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    if args.command == "print":
        from routemap.cli._print import run_print

        run_print(args)
    elif args.command == "json":
        from routemap.cli._json import run_json

        run_json(args)
    elif args.command == "serve":
        from routemap.cli._serve import run_serve

        run_serve(args)
