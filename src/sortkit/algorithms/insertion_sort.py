"""
Insertion sort.

Grows a sorted prefix one element at a time: the element at `p` is held
while every larger predecessor shifts one slot to the right, then dropped
into the hole. Stable, in place, O(1) extra memory, O(n^2) average and worst
case, O(n) on input that is already sorted.

The bounded form `insertion_sort(a, low, high)` is also the small-range
fallback used by quicksort.
"""

from __future__ import annotations

from typing import Any, Dict, MutableSequence, Optional

from ._common import check_bounds, check_config

__all__ = ["insertion_sort", "sort"]


def insertion_sort(a: MutableSequence[Any], low: int = 0, high: Optional[int] = None) -> None:
    """
    Sort the inclusive range `a[low..high]` in place.

    Parameters
    ----------
    a : MutableSequence
        Sequence of mutually comparable elements.
    low : int
        First index of the range (default 0).
    high : int | None
        Last index of the range (default `len(a) - 1`).

    Raises
    ------
    InvalidRangeError
        If the range lies outside `a` or has `low > high + 1`.
    """
    if high is None:
        high = len(a) - 1
    check_bounds(a, low, high)
    _insertion_sort(a, low, high)


def _insertion_sort(a: MutableSequence[Any], low: int, high: int) -> None:
    for p in range(low + 1, high + 1):
        tmp = a[p]
        j = p
        try:
            while j > low and tmp < a[j - 1]:
                a[j] = a[j - 1]
                j -= 1
        finally:
            a[j] = tmp


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    """Sort `a` in place. Accepts no config keys."""
    check_config("insertion_sort", config)
    _insertion_sort(a, 0, len(a) - 1)
