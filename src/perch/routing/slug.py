"""Identifier-safe names derived from route file paths.

Slugs name components and server routes in the manifest, so bundlers
and generated client code can refer to them as plain identifiers::

    get_slug("blog/index.html")        -> "blog"
    get_slug("blog/[slug].html")       -> "blog_$slug"
    get_slug("blog/index.json.py")     -> "blog_json"
    get_slug("a-b.html")               -> "a$45b"
    get_slug("delete.html")            -> "delete_"
"""

import re

# Keywords of the component-authoring language; never a bare slug.
RESERVED_WORDS = frozenset({
    "arguments",
    "await",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "eval",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
})

_TRAILING_INDEX_RE = re.compile(r"[\\/]index(?=\.[^\\/]*$|$)")
_DEFAULT_RE = re.compile(r"(?:(?<=[\\/])|^)_default(?:\.\w+)?$")
_SEPARATOR_RE = re.compile(r"[\\/]")
_EXTENSION_RE = re.compile(r"\.\w+$")
_PARAM_RE = re.compile(r"\[([^(\]]+)(?:\([^()]*\))?\]")
_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_$]")


def posixify(file: str) -> str:
    """Normalise path separators to ``/``."""
    return file.replace("\\", "/")


def get_slug(file: str) -> str:
    """Derive a unique, identifier-safe name from a relative file path."""
    name = _TRAILING_INDEX_RE.sub("", file, count=1)
    name = _DEFAULT_RE.sub("index", name)
    name = _SEPARATOR_RE.sub("_", name)
    name = _EXTENSION_RE.sub("", name)
    name = _PARAM_RE.sub(r"$\1", name)
    name = _UNSAFE_RE.sub(_escape_char, name)

    if name in RESERVED_WORDS:
        name += "_"
    return name


def _escape_char(match: re.Match[str]) -> str:
    char = match.group(0)
    if char == ".":
        return "_"
    return f"${ord(char)}"
