"""Detect whether a component exports a ``preload`` function.

The check is a cheap source inspection: components that never mention
``preload`` are rejected without further work; the rest have their
``<style>`` blocks removed and their module-context ``<script>`` blocks
searched for an exported ``preload``.

Callers that have a real component compiler available can pass their
own :data:`PreloadDetector` to :func:`perch.manifest.create_manifest_data`.
"""

import re
from collections.abc import Callable
from pathlib import Path

PreloadDetector = Callable[[Path], bool]

_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)

# <script context="module"> (Svelte 3/4) or a bare <script module> attribute (Svelte 5);
# <script type="module"> is an ordinary browser module, not a module script
_MODULE_SCRIPT_RE = re.compile(
    r"<script\b(?=[^>]*(?:\bcontext\s*=\s*[\"']module[\"']|\smodule(?=[\s/>])))[^>]*>(.*?)</script>",
    re.DOTALL | re.IGNORECASE,
)

_EXPORT_PRELOAD_RE = re.compile(
    r"\bexport\s+(?:async\s+function\s*\*?|function\s*\*?|const|let|var)\s+preload\b"
    r"|\bexport\s*\{[^}]*\bpreload\b[^}]*\}"
)


def has_preload(file: Path) -> bool:
    """Return True if the component at *file* exports ``preload``.

    Raises:
        OSError: The file cannot be read.
    """
    source = file.read_text(encoding="utf-8")
    return source_has_preload(source)


def source_has_preload(source: str) -> bool:
    """Source-text form of :func:`has_preload`."""
    if "preload" not in source:
        return False

    source = _STYLE_RE.sub("", source)
    return any(
        _EXPORT_PRELOAD_RE.search(block)
        for block in _MODULE_SCRIPT_RE.findall(source)
    )
