"""Route segment parsing.

A segment is one path component: a directory name or a file name with
its extension stripped.  Square brackets mark dynamic parameters, with
an optional inline regex qualifier::

    "about"          -> [Part("about")]
    "[slug]"         -> [Part("slug", dynamic=True)]
    "[id(\\d+)]"     -> [Part("id", dynamic=True, qualifier="\\d+")]
    "v[major].json"  -> [Part("v"), Part("major", dynamic=True), Part(".json")]
"""

import re
from dataclasses import dataclass

from perch.errors import RouteSyntaxError

# name, then an optional (qualifier) running to the closing bracket
_TOKEN_RE = re.compile(r"^([^()\[\]]+)(?:\((.+)\))?$")

# Characters that would break pattern construction inside a qualifier
_QUALIFIER_FORBIDDEN_RE = re.compile(r"[()?:]")


@dataclass(frozen=True, slots=True)
class Part:
    """An atomic literal or dynamic unit of a segment.

    Static:    ``about``        (dynamic=False, content is literal text)
    Param:     ``[slug]``       (dynamic=True, content is the parameter name)
    Qualified: ``[id(\\d+)]``   (dynamic=True, qualifier="\\d+")
    """

    content: str
    dynamic: bool = False
    qualifier: str | None = None


def parse_segment(segment: str, file: str | None = None) -> tuple[Part, ...]:
    """Split *segment* into alternating static and dynamic parts.

    Empty leading/trailing literals are dropped.  A ``[`` with no matching
    ``]`` is kept as literal text.

    Args:
        segment: The directory name or extension-less file name.
        file: Path used in error messages (defaults to *segment*).

    Raises:
        RouteSyntaxError: Two parameters are adjacent, a bracketed token is
            malformed, or a qualifier uses ``(``, ``)``, ``?`` or ``:``.
    """
    where = file if file is not None else segment
    parts: list[Part] = []
    literal: list[str] = []
    i = 0
    n = len(segment)

    while i < n:
        char = segment[i]
        if char != "[":
            literal.append(char)
            i += 1
            continue

        end = _find_token_end(segment, i)
        if end < 0:
            literal.append(char)
            i += 1
            continue

        if literal:
            parts.append(Part("".join(literal)))
            literal = []
        elif parts and parts[-1].dynamic:
            raise RouteSyntaxError(where, "parameters must be separated")

        parts.append(_parse_token(segment[i + 1 : end], where))
        i = end + 1

    if literal:
        parts.append(Part("".join(literal)))

    return tuple(parts)


def _find_token_end(segment: str, start: int) -> int:
    """Return the index of the ``]`` closing the token opened at *start*, or -1.

    Brackets nested inside a parenthesised qualifier (``[id([0-9]+)]``)
    do not close the token.
    """
    depth = 0
    for j in range(start + 1, len(segment)):
        char = segment[j]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "]" and depth == 0:
            return j
    return -1


def _parse_token(token: str, where: str) -> Part:
    match = _TOKEN_RE.match(token)
    if match is None:
        raise RouteSyntaxError(where, f"malformed parameter [{token}]")

    name, qualifier = match.group(1), match.group(2)
    if qualifier is not None and _QUALIFIER_FORBIDDEN_RE.search(qualifier):
        raise RouteSyntaxError(where, "cannot use (, ), ? or : in route qualifiers")

    return Part(name, dynamic=True, qualifier=qualifier)


def render_segment(parts: tuple[Part, ...] | list[Part]) -> str:
    """Render parts back to their canonical file-name form."""
    out: list[str] = []
    for part in parts:
        if not part.dynamic:
            out.append(part.content)
        elif part.qualifier is None:
            out.append(f"[{part.content}]")
        else:
            out.append(f"[{part.content}({part.qualifier})]")
    return "".join(out)


def param_names(parts: tuple[Part, ...] | list[Part]) -> tuple[str, ...]:
    """Dynamic parameter names in *parts*, left to right."""
    return tuple(part.content for part in parts if part.dynamic)
