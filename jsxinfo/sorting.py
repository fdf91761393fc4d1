"""Sort policies for (name, count) report entries."""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Callable, Dict, List, Mapping, Tuple

Entry = Tuple[str, int]


class SortPolicy(str, Enum):
    USAGE = "usage"
    ALPHABETICAL = "alphabetical"


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _compare_usage(a: Entry, b: Entry) -> int:
    # count descending, then name descending
    return _cmp(b[1], a[1]) or _cmp(b[0], a[0])


def _compare_alphabetical(a: Entry, b: Entry) -> int:
    # name ascending, then count descending
    return _cmp(a[0], b[0]) or _cmp(b[1], a[1])


_COMPARATORS: Dict[SortPolicy, Callable[[Entry, Entry], int]] = {
    SortPolicy.USAGE: _compare_usage,
    SortPolicy.ALPHABETICAL: _compare_alphabetical,
}


def sort_counts(counts: Mapping[str, int], policy: SortPolicy) -> List[Entry]:
    """Return the entries of ``counts`` ordered by ``policy``.

    The mapping is not modified.
    """
    comparator = _COMPARATORS[SortPolicy(policy)]
    return sorted(counts.items(), key=cmp_to_key(comparator))


__all__ = ["SortPolicy", "sort_counts"]
