"""Perch: compile a directory of route files into an ordered route manifest.

Pages, layouts, error components and server routes are discovered from
file names alone.  The result is an unambiguous table of URL patterns,
most specific first, each page carrying the chain of layouts that wrap it.

Basic usage::

    from perch import create_manifest_data

    manifest = create_manifest_data("src/routes")
    for page in manifest.pages:
        print(page.pattern, page.file)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ManifestConfig",
    "ManifestData",
    "MissingIndexError",
    "NotFound",
    "PerchError",
    "RouteClashError",
    "RouteSyntaxError",
    "Router",
    "create_manifest_data",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "create_manifest_data":
        from perch.manifest.discovery import create_manifest_data

        return create_manifest_data

    if name == "ManifestData":
        from perch.manifest.types import ManifestData

        return ManifestData

    if name == "ManifestConfig":
        from perch.config import ManifestConfig

        return ManifestConfig

    if name == "Router":
        from perch.routing.router import Router

        return Router

    if name in (
        "ConfigurationError",
        "MissingIndexError",
        "NotFound",
        "PerchError",
        "RouteClashError",
        "RouteSyntaxError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
