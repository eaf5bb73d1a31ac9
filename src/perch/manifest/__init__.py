"""Filesystem-to-route-table compilation.

The ``routes/`` directory structure defines URL patterns, layout
nesting, and server endpoints.

Usage::

    manifest = create_manifest_data("src/routes")
    for page in manifest.pages:
        print(page.pattern, [part.component.name for part in page.parts])

Conventions:

    routes/
      _layout.svelte       # Root layout
      _error.svelte        # Root error page
      index.svelte         # /
      about.svelte         # /about
      blog/
        _layout.svelte     # Wraps everything under /blog
        index.svelte       # /blog
        index.json.py      # /blog.json (server route)
        [slug].svelte      # /blog/:slug
        [slug].json.py     # /blog/:slug.json (server route)
"""

from perch.manifest.assemble import assemble_manifest
from perch.manifest.discovery import FileEntry, create_manifest_data
from perch.manifest.preload import has_preload
from perch.manifest.types import (
    DEFAULT_ERROR,
    DEFAULT_LAYOUT,
    ManifestData,
    Page,
    PageComponent,
    PagePart,
    ServerRoute,
)

__all__ = [
    "DEFAULT_ERROR",
    "DEFAULT_LAYOUT",
    "FileEntry",
    "ManifestData",
    "Page",
    "PageComponent",
    "PagePart",
    "ServerRoute",
    "assemble_manifest",
    "create_manifest_data",
    "has_preload",
]
