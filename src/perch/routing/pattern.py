"""Compiled URL patterns.

A :class:`CompiledPattern` is built once from the segments of a route
and keeps two forms: a structured token sequence (literal text or a
capture with an optional qualifier) and the anchored regular expression
source derived from it.  The source text is the identity of the pattern:
two routes whose sources are equal clash.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from functools import lru_cache
from urllib.parse import quote, unquote

from perch.routing.parts import Part

# Characters encodeURI leaves alone (on top of quote's always-safe set)
_URI_SAFE = ";,/?:@&=+$!*'()#"

# Default capture for an unqualified parameter: one or more non-slash chars
_DEFAULT_CAPTURE = "[^/]+?"


@dataclass(frozen=True, slots=True)
class Literal:
    """Percent-encoded literal text that must appear verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Capture:
    """A captured parameter, optionally constrained by a regex qualifier."""

    name: str
    qualifier: str | None = None


Token = Literal | Capture


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """An anchored matcher over a URL path.

    Equality and hashing use :attr:`source` only, so two independently
    compiled patterns that accept the same paths compare equal even when
    their parameter names differ.

    Attributes:
        source: Anchored regular expression text.
        tokens: Structured form, one token per literal run or capture.
        params: Parameter names bound to captures, left to right.
        trailing_slash: Whether a single trailing ``/`` is accepted.
    """

    source: str
    tokens: tuple[Token, ...] = field(default=(), compare=False)
    params: tuple[str, ...] = field(default=(), compare=False)
    trailing_slash: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        return self.source

    @property
    def regex(self) -> re.Pattern[str]:
        return _compile(self.source)

    def match(self, path: str) -> dict[str, str] | None:
        """Match *path*, returning decoded parameter values or ``None``."""
        m = self.regex.match(path)
        if m is None:
            return None
        return {name: unquote(value) for name, value in zip(self.params, m.groups(), strict=True)}


@lru_cache(maxsize=1024)
def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source)


def encode_literal(text: str) -> str:
    """Percent-encode static text the way it appears in a request path.

    Text is NFC-normalised first.  ``?`` and ``#`` are always encoded,
    while square brackets stay literal.
    """
    encoded = quote(unicodedata.normalize("NFC", text), safe=_URI_SAFE)
    return (
        encoded.replace("?", "%3F")
        .replace("#", "%23")
        .replace("%5B", "[")
        .replace("%5D", "]")
    )


def compile_pattern(segments: list[tuple[Part, ...]], *, trailing_slash: bool) -> CompiledPattern:
    """Compile a list of segments into an anchored pattern.

    Args:
        segments: One part sequence per path level, root first.
        trailing_slash: Accept an optional trailing ``/`` (pages do,
            server routes do not).
    """
    tokens: list[Token] = []
    source: list[str] = ["^"]

    for segment in segments:
        literal = ["/"]
        for part in segment:
            if not part.dynamic:
                literal.append(encode_literal(part.content))
                continue
            if literal:
                tokens.append(Literal("".join(literal)))
                source.append(re.escape("".join(literal)))
                literal = []
            tokens.append(Capture(part.content, part.qualifier))
            source.append(f"({part.qualifier or _DEFAULT_CAPTURE})")
        if literal:
            tokens.append(Literal("".join(literal)))
            source.append(re.escape("".join(literal)))

    source.append("/?$" if trailing_slash else "$")

    return CompiledPattern(
        source="".join(source),
        tokens=_merge_literals(tokens),
        params=tuple(t.name for t in tokens if isinstance(t, Capture)),
        trailing_slash=trailing_slash,
    )


def _merge_literals(tokens: list[Token]) -> tuple[Token, ...]:
    """Join adjacent literal tokens that span a segment boundary."""
    merged: list[Token] = []
    for token in tokens:
        if isinstance(token, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + token.text)
        else:
            merged.append(token)
    return tuple(merged)
