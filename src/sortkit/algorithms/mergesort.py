"""
Top-down merge sort.

Recursively halves the range, sorts both halves, and merges them through a
single auxiliary list sized to the whole input. The auxiliary list is
allocated per call and never shared. Stable, O(n log n) in every case,
O(n) extra memory, O(log n) recursion depth.
"""

from __future__ import annotations

from typing import Any, Dict, List, MutableSequence, Optional

from ._common import check_config

__all__ = ["mergesort", "merge", "sort"]


def mergesort(a: MutableSequence[Any]) -> None:
    """Sort `a` in place in non-decreasing order."""
    tmp: List[Any] = [None] * len(a)
    _mergesort(a, tmp, 0, len(a) - 1)


def _mergesort(a: MutableSequence[Any], tmp: List[Any], left: int, right: int) -> None:
    if left < right:
        center = (left + right) // 2
        _mergesort(a, tmp, left, center)
        _mergesort(a, tmp, center + 1, right)
        merge(a, tmp, left, center + 1, right)


def merge(
    a: MutableSequence[Any], tmp: List[Any], left_pos: int, right_pos: int, right_end: int
) -> None:
    """
    Merge the sorted runs `a[left_pos:right_pos]` and `a[right_pos:right_end + 1]`.

    The merged run is built in `tmp` over the same indices and copied back
    into `a` only once it is complete, so a failing comparison leaves `a`
    untouched for this range.

    Parameters
    ----------
    a : MutableSequence
        Sequence holding both runs back to back.
    tmp : list
        Scratch list at least `right_end + 1` long.
    left_pos : int
        First index of the left run.
    right_pos : int
        First index of the right run.
    right_end : int
        Last index of the right run (inclusive).
    """
    start = left_pos
    left_end = right_pos - 1
    k = left_pos

    while left_pos <= left_end and right_pos <= right_end:
        # ties go to the left run
        if a[right_pos] < a[left_pos]:
            tmp[k] = a[right_pos]
            right_pos += 1
        else:
            tmp[k] = a[left_pos]
            left_pos += 1
        k += 1

    # at most one of the runs has anything left
    rest = left_end - left_pos + 1
    tmp[k:k + rest] = a[left_pos:left_end + 1]
    k += rest
    tmp[k:right_end + 1] = a[right_pos:right_end + 1]

    for i in range(start, right_end + 1):
        a[i] = tmp[i]


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    """Sort `a` in place. Accepts no config keys."""
    check_config("mergesort", config)
    mergesort(a)
