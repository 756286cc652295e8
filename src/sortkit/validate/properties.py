"""
Property helpers for validating sorting results.

Used by the tests and by the timing harness, which checks every timed
result before recording it.

Public API (stable):
    is_nondecreasing(xs: Sequence) -> bool
    first_nondecreasing_violation_index(xs: Sequence) -> int | None
    assert_sorted(xs: Sequence) -> None
    is_permutation(a: Sequence, b: Sequence) -> bool
    permutation_counter_diff(a: Sequence, b: Sequence) -> dict
    is_stable(before: Sequence[Tagged], after: Sequence[Tagged]) -> bool

Notes
-----
- Elements only need `<=` (and hashing for the permutation checks).
- Stability cannot be read off plain values; it needs records that carry a
  tie-breaking tag (see `sortkit.validate.probes.Tagged`).
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Dict, List, Sequence

from sortkit.errors import NotSortedError

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "assert_sorted",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff xs[k] <= xs[k+1] for every adjacent pair."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> int | None:
    """
    Return the first index k where xs[k] <= xs[k+1] fails, or None.

    Useful for precise error messages:
        k = first_nondecreasing_violation_index(out)
        assert k is None, f"not sorted at k={k}: {out[k]} > {out[k+1]}"
    """
    for k in range(len(xs) - 1):
        if not xs[k] <= xs[k + 1]:
            return k
    return None


def assert_sorted(xs: Sequence[Any]) -> None:
    """
    Raise NotSortedError naming the first out-of-order pair, if any.
    """
    k = first_nondecreasing_violation_index(xs)
    if k is not None:
        raise NotSortedError(
            f"not sorted afterward: xs[{k}]={xs[k]!r} > xs[{k + 1}]={xs[k + 1]!r}"
        )


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of values.
    """
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Any], b: Sequence[Any]) -> Dict[Any, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {value: d for value, d in diff.items() if d != 0}


def is_stable(before: Sequence[Any], after: Sequence[Any]) -> bool:
    """
    Return True iff records with equal keys appear in `after` in the same
    relative order as in `before`.

    Records must expose `.key` and `.tag` (see `Tagged`); tags must be unique.
    """
    def tags_by_key(records: Sequence[Any]) -> Dict[Any, List[Any]]:
        out: Dict[Any, List[Any]] = defaultdict(list)
        for r in records:
            out[r.key].append(r.tag)
        return out

    return tags_by_key(before) == tags_by_key(after)
