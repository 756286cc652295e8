"""
Validation utilities public API.

Re-exports:
    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        assert_sorted
        is_permutation
        permutation_counter_diff
        is_stable

    - Probes:
        ComparisonCounter
        Tagged
        tag_sequence
"""

from .probes import ComparisonCounter, Tagged, tag_sequence
from .properties import (
    assert_sorted,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    is_stable,
    permutation_counter_diff,
)

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "assert_sorted",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "ComparisonCounter",
    "Tagged",
    "tag_sequence",
]
