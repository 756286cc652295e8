"""
sortkit: classical comparison sorts with a small benchmarking harness.

    from sortkit import heapsort, insertion_sort, mergesort, quicksort

    a = [5, 3, 8, 1, 9, 2]
    quicksort(a)        # a == [1, 2, 3, 5, 8, 9]
"""

from sortkit.algorithms.heapsort import heapsort
from sortkit.algorithms.insertion_sort import insertion_sort
from sortkit.algorithms.mergesort import mergesort
from sortkit.algorithms.quicksort import quicksort
from sortkit.errors import InvalidRangeError, NotSortedError, SortError

__version__ = "0.1.0"

__all__ = [
    "heapsort",
    "insertion_sort",
    "mergesort",
    "quicksort",
    "SortError",
    "InvalidRangeError",
    "NotSortedError",
]
