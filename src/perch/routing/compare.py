"""Route specificity ordering.

Siblings within one directory are sorted most-specific-first, so that
the order pages and server routes are emitted in is also the order a
router should try them in.  Comparison walks two part sequences
position by position:

1. A position present in only one sequence wins (fewer parts = later).
2. Static beats dynamic.
3. Two different statics: longer literal first, then plain string order.
4. Two dynamics: qualified beats unqualified; between two qualifiers
   the longer one wins.  Equal-length qualifiers are left unordered and
   fall through to the next position.

Index entries always sort before non-index siblings.
"""

from collections.abc import Iterable, Sequence
from functools import cmp_to_key
from typing import Protocol, TypeVar

from perch.routing.parts import Part


class Comparable(Protocol):
    @property
    def parts(self) -> tuple[Part, ...]: ...

    @property
    def is_index(self) -> bool: ...


E = TypeVar("E", bound=Comparable)


def compare_parts(a: Sequence[Part], b: Sequence[Part]) -> int:
    """Compare two part sequences by specificity.

    Returns a negative number when *a* is more specific (sorts first),
    positive when *b* is, and ``0`` when no rule separates them.
    """
    for i in range(max(len(a), len(b))):
        if i >= len(a):
            return 1
        if i >= len(b):
            return -1

        a_part = a[i]
        b_part = b[i]

        if a_part.dynamic != b_part.dynamic:
            return 1 if a_part.dynamic else -1

        if not a_part.dynamic:
            if a_part.content != b_part.content:
                diff = len(b_part.content) - len(a_part.content)
                if diff:
                    return diff
                return -1 if a_part.content < b_part.content else 1
            continue

        a_qualifier = a_part.qualifier
        b_qualifier = b_part.qualifier
        if a_qualifier is None and b_qualifier is not None:
            return 1
        if b_qualifier is None and a_qualifier is not None:
            return -1
        if a_qualifier is not None and b_qualifier is not None and a_qualifier != b_qualifier:
            diff = len(b_qualifier) - len(a_qualifier)
            if diff:
                return diff

    return 0


def compare_entries(a: Comparable, b: Comparable) -> int:
    """Compare two directory entries: index first, then by parts."""
    if a.is_index != b.is_index:
        return -1 if a.is_index else 1
    return compare_parts(a.parts, b.parts)


def sort_entries(entries: Iterable[E]) -> list[E]:
    """Sort directory entries most-specific-first (stable for ties)."""
    return sorted(entries, key=cmp_to_key(compare_entries))
