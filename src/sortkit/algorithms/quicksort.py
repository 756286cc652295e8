"""
Quicksort with median-of-three pivot selection and an insertion-sort cutoff.

For a range `[low, high]`:
    1. Ranges with `high - low < cutoff` go to insertion sort.
    2. `a[low]`, `a[middle]`, `a[high]` are put in order, then the median is
       parked at `high - 1` and used as the pivot.
    3. Two cursors scan inwards from `low` and `high - 1`, swapping pairs
       that sit on the wrong side, until they cross.
    4. The pivot is swapped into its final slot `i`.
    5. `[low, i - 1]` and `[i + 1, high]` are sorted.

The ordered ends act as sentinels, so neither scan can leave `[low, high]`.
Only the smaller side is sorted recursively; the larger one is handled by
the enclosing loop, which keeps the stack depth under log2(n).

In place, not stable, O(n log n) average, O(n^2) worst case.

Config:
    {"cutoff": int}   # >= 2, default 10
"""

from __future__ import annotations

from typing import Any, Dict, MutableSequence, Optional

from sortkit.errors import InvalidRangeError

from ._common import check_bounds, check_config, swap_references
from .insertion_sort import _insertion_sort

__all__ = ["CUTOFF", "MIN_CUTOFF", "quicksort", "partition", "sort"]

CUTOFF = 10

# median-of-three needs low < high - 1 so the pivot slot differs from `low`
MIN_CUTOFF = 2


def quicksort(a: MutableSequence[Any], cutoff: int = CUTOFF) -> None:
    """
    Sort `a` in place in non-decreasing order.

    Parameters
    ----------
    a : MutableSequence
        Sequence of mutually comparable elements.
    cutoff : int
        Ranges with `high - low < cutoff` are finished with insertion sort.
        Must be an integer >= 2.
    """
    _validate_cutoff(cutoff)
    _quicksort(a, 0, len(a) - 1, cutoff)


def _quicksort(a: MutableSequence[Any], low: int, high: int, cutoff: int) -> None:
    while high - low >= cutoff:
        i = partition(a, low, high)
        if i - low < high - i:
            _quicksort(a, low, i - 1, cutoff)  # sort small elements
            low = i + 1
        else:
            _quicksort(a, i + 1, high, cutoff)  # sort large elements
            high = i - 1
    _insertion_sort(a, low, high)


def _median_of_three(a: MutableSequence[Any], low: int, high: int) -> Any:
    middle = (low + high) // 2
    if a[middle] < a[low]:
        swap_references(a, low, middle)
    if a[high] < a[low]:
        swap_references(a, low, high)
    if a[high] < a[middle]:
        swap_references(a, middle, high)

    # park the pivot next to the sentinel at `high`
    swap_references(a, middle, high - 1)
    return a[high - 1]


def partition(a: MutableSequence[Any], low: int, high: int) -> int:
    """
    Partition `a[low..high]` around a median-of-three pivot.

    Requires `high - low >= 2`. Returns the final index `p` of the pivot:
    everything in `a[low:p]` is <= `a[p]` and everything in
    `a[p + 1:high + 1]` is >= `a[p]`.

    Raises
    ------
    InvalidRangeError
        If the range lies outside `a` or holds fewer than three elements.
    """
    check_bounds(a, low, high)
    if high - low < MIN_CUTOFF:
        raise InvalidRangeError(
            f"partition needs at least {MIN_CUTOFF + 1} elements; got range [{low}, {high}]"
        )
    pivot = _median_of_three(a, low, high)

    i, j = low, high - 1
    while True:
        i += 1
        while a[i] < pivot:
            i += 1
        j -= 1
        while pivot < a[j]:
            j -= 1
        if i >= j:
            break
        swap_references(a, i, j)

    # restore pivot
    swap_references(a, i, high - 1)
    return i


def _validate_cutoff(cutoff: Any) -> None:
    if isinstance(cutoff, bool) or not isinstance(cutoff, int):
        raise ValueError(f"quicksort: cutoff must be an int; got {cutoff!r}")
    if cutoff < MIN_CUTOFF:
        raise ValueError(f"quicksort: cutoff must be >= {MIN_CUTOFF}; got {cutoff}")


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    """Sort `a` in place. Optional config key: `cutoff`."""
    config = check_config("quicksort", config, allowed=("cutoff",))
    quicksort(a, cutoff=config.get("cutoff", CUTOFF))
