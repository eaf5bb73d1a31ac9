"""Routes directory compilation for CLI commands.

Shared utility used by ``perch routes`` and ``perch check`` to turn
parsed arguments into a :class:`ManifestData`, reporting failures the
same way.
"""

import argparse
import sys

from perch.config import ManifestConfig
from perch.errors import PerchError
from perch.manifest.discovery import create_manifest_data
from perch.manifest.types import ManifestData


def compile_from_args(args: argparse.Namespace) -> ManifestData:
    """Compile ``args.routes`` using the extensions in ``args.ext``.

    Prints ``Error: <message>`` to stderr and raises ``SystemExit(1)``
    when the configuration is invalid or compilation fails.
    """
    try:
        config = ManifestConfig(component_extensions=tuple(args.ext)) if args.ext else ManifestConfig()
        return create_manifest_data(args.routes, config)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
