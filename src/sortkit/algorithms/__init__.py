"""
Sorting algorithms public API.

Each algorithm lives in its own module and exposes the same entry point:

    sort(a, *, config=None) -> None     # sorts `a` in place

so the benchmark runner can resolve them by module name:
    from sortkit.algorithms import heapsort, insertion_sort, mergesort, quicksort
"""

from . import heapsort, insertion_sort, mergesort, quicksort
from ._common import swap_references

ALGORITHM_NAMES = ("heapsort", "insertion_sort", "mergesort", "quicksort")

__all__ = [
    "ALGORITHM_NAMES",
    "heapsort",
    "insertion_sort",
    "mergesort",
    "quicksort",
    "swap_references",
]
