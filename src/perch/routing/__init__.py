"""Routing: segment parsing, specificity ordering, and compiled patterns.

Pure functions over file names; nothing here touches the filesystem.
"""

from perch.routing.compare import compare_entries, compare_parts, sort_entries
from perch.routing.parts import Part, param_names, parse_segment, render_segment
from perch.routing.pattern import CompiledPattern, compile_pattern
from perch.routing.router import RouteMatch, Router
from perch.routing.slug import RESERVED_WORDS, get_slug

__all__ = [
    "RESERVED_WORDS",
    "CompiledPattern",
    "Part",
    "RouteMatch",
    "Router",
    "compare_entries",
    "compare_parts",
    "compile_pattern",
    "get_slug",
    "param_names",
    "parse_segment",
    "render_segment",
    "sort_entries",
]
