"""Ordering of route directory entries.

More specific segment kinds sort first, mirroring the order in which a
router prefers them: static, matcher, dynamic, optional, rest. Entries
of the same kind are ordered naturally (digit runs compared as numbers)
or by plain string comparison.
"""

import re
from collections.abc import Iterable

from routeradar.core.segments import classify
from routeradar.core.types import SegmentKind, SortOrder

_KIND_PRIORITY: dict[SegmentKind, int] = {
    SegmentKind.STATIC: 5,
    SegmentKind.GROUP: 5,
    SegmentKind.MATCHER: 4,
    SegmentKind.DYNAMIC: 3,
    SegmentKind.OPTIONAL: 2,
    SegmentKind.REST: 1,
}

_DIGITS_RE = re.compile(r"(\d+)")


def kind_priority(entry_name: str) -> int:
    """Return the sort priority of an entry (higher sorts first).

    Only the last path segment is considered, so ``blog/[slug]`` ranks
    as dynamic.
    """
    segment = entry_name.rsplit("/", 1)[-1]
    return _KIND_PRIORITY[classify(segment)]


def natural_key(value: str) -> tuple[tuple[int, int, str], ...]:
    """Split a string into comparable chunks.

    Digit runs compare by numeric value and sort before text at the same
    position, so ``item2`` < ``item10`` and ``1article`` < ``article``.
    """
    key: list[tuple[int, int, str]] = []
    for chunk in _DIGITS_RE.split(value):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk), chunk))
        else:
            key.append((1, 0, chunk))
    return tuple(key)


def sort_key(entry_name: str, order: SortOrder = SortOrder.NATURAL) -> tuple:
    if order == SortOrder.NATURAL:
        return (-kind_priority(entry_name), natural_key(entry_name))
    return (-kind_priority(entry_name), entry_name)


def compare_routes(a: str, b: str, order: SortOrder = SortOrder.NATURAL) -> int:
    """Compare two entry names; negative when a sorts before b."""
    key_a = sort_key(a, order)
    key_b = sort_key(b, order)
    return (key_a > key_b) - (key_a < key_b)


def sort_entries(names: Iterable[str], order: SortOrder = SortOrder.NATURAL) -> list[str]:
    """Sort entry names by kind priority, then by the selected order.

    The sort is stable, so fully equal names keep their input order.
    """
    return sorted(names, key=lambda name: sort_key(name, order))
