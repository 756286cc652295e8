"""
Heapsort.

Builds a binary max-heap over the whole sequence, then repeatedly swaps the
root (the current maximum) to the tail and shrinks the logical heap by one.
Worst case O(n log n), in place, not stable.

Heap layout: the children of index `i` are `2i + 1` and `2i + 2`; for logical
size `n` every node with `2i + 1 < n` is >= both of its children.
"""

from __future__ import annotations

from typing import Any, Dict, MutableSequence, Optional

from ._common import check_config, swap_references

__all__ = ["heapsort", "build_max_heap", "sift_down", "sort"]


def _left_child(i: int) -> int:
    return 2 * i + 1


def sift_down(a: MutableSequence[Any], i: int, n: int) -> None:
    """
    Percolate `a[i]` down until the max-heap property holds below it.

    `n` is the logical size of the heap; slots at `n` and beyond are ignored.
    """
    tmp = a[i]
    try:
        while _left_child(i) < n:
            child = _left_child(i)
            # prefer the right child only when it exists and is strictly larger
            if child != n - 1 and a[child] < a[child + 1]:
                child += 1
            if tmp < a[child]:
                a[i] = a[child]
                i = child
            else:
                break
    finally:
        a[i] = tmp


def build_max_heap(a: MutableSequence[Any]) -> None:
    """Rearrange `a` in place so that it satisfies the max-heap property."""
    n = len(a)
    if n == 0:
        return
    for i in range(n // 2, -1, -1):
        sift_down(a, i, n)


def heapsort(a: MutableSequence[Any]) -> None:
    """Sort `a` in place in non-decreasing order."""
    if len(a) < 2:
        return
    build_max_heap(a)
    for i in range(len(a) - 1, 0, -1):
        swap_references(a, 0, i)  # deleteMax
        sift_down(a, 0, i)


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    """Sort `a` in place. Accepts no config keys."""
    check_config("heapsort", config)
    heapsort(a)
