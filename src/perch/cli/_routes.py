"""``perch routes``: list compiled routes.

Compiles a routes directory and prints pages and server routes in the
order a router tries them, with pattern, file, and parameters.
"""

import argparse

from perch.cli._compile import compile_from_args


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of KIND, PATTERN, FILE, and PARAMS for ``args.routes``."""
    manifest = compile_from_args(args)

    # Build rows: (kind, pattern, file, params)
    rows: list[tuple[str, str, str, str]] = []
    for page in manifest.pages:
        chain = " > ".join(part.component.name for part in page.parts)
        rows.append(("page", str(page.pattern), f"{page.file} ({chain})", ", ".join(page.params)))
    for route in manifest.server_routes:
        rows.append(("route", str(route.pattern), route.file, ", ".join(route.params)))

    if not rows:
        print("No routes found.")
        return

    # Column widths
    max_kind = max(max(len(r[0]) for r in rows), 4)  # "KIND" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header
    max_file = max(max(len(r[2]) for r in rows), 4)  # "FILE" header

    # Print table
    fmt = f"{{:<{max_kind}}}  {{:<{max_pattern}}}  {{:<{max_file}}}  {{}}"
    print(fmt.format("KIND", "PATTERN", "FILE", "PARAMS"))
    sep_len = max_kind + max_pattern + max_file + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for kind, pattern, file, params in rows:
        print(fmt.format(kind, pattern, file, params).rstrip())
