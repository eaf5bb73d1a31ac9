"""Perch CLI: inspect and validate a routes directory.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("routes", help="Path to the routes directory (e.g. src/routes)")
    parser.add_argument(
        "--ext",
        action="append",
        default=None,
        metavar="EXT",
        help="Component file extension (repeatable, default: .svelte and .html)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every discovered page and server route",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: compile a routes directory into a route manifest.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes in match order")
    _add_common(routes_parser)

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a routes directory")
    _add_common(check_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
