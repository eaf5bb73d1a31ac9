"""``perch check``: routes directory validation command.

Compiles a routes directory and reports whether it is valid.  Exits
with code 1 on syntax errors, clashes, or missing index pages.
"""

import argparse

from perch.cli._compile import compile_from_args


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.routes`` and print a one-line summary."""
    manifest = compile_from_args(args)
    print(
        f"OK: {len(manifest.pages)} pages, {len(manifest.server_routes)} server routes, "
        f"{len(manifest.components)} components"
    )
