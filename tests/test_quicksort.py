"""
Quicksort internals: cutoff routing, partition invariant, recursion depth.
"""

from __future__ import annotations

import math
from typing import List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from sortkit import InvalidRangeError
from sortkit.algorithms import quicksort as qs


def _spy_insertion(monkeypatch) -> List[tuple]:
    calls: List[tuple] = []
    real = qs._insertion_sort

    def spy(a, low, high):
        calls.append((low, high))
        real(a, low, high)

    monkeypatch.setattr(qs, "_insertion_sort", spy)
    return calls


def test_short_input_goes_straight_to_insertion_sort(monkeypatch) -> None:
    calls = _spy_insertion(monkeypatch)
    partitions = []
    real_partition = qs.partition
    monkeypatch.setattr(qs, "partition", lambda a, lo, hi: partitions.append((lo, hi)) or real_partition(a, lo, hi))

    a = [3, 1, 4, 1, 5]
    qs.quicksort(a)

    assert a == [1, 1, 3, 4, 5]
    assert calls == [(0, 4)]
    assert partitions == []


def test_cutoff_boundary(monkeypatch) -> None:
    # high - low == 9 is still below the cutoff of 10; 10 is not
    partitions = []
    real_partition = qs.partition
    monkeypatch.setattr(qs, "partition", lambda a, lo, hi: partitions.append((lo, hi)) or real_partition(a, lo, hi))

    qs.quicksort(list(range(10, 0, -1)))
    assert partitions == []

    qs.quicksort(list(range(11, 0, -1)))
    assert partitions[0] == (0, 10)


def test_large_input_partitions_then_finishes_small_ranges(monkeypatch) -> None:
    calls = _spy_insertion(monkeypatch)
    a = list(range(200, 0, -1))
    qs.quicksort(a)
    assert a == list(range(1, 201))
    assert calls
    assert all(high - low < qs.CUTOFF for low, high in calls)


def _assert_partitioned(a: List[int], low: int, high: int, p: int) -> None:
    assert low <= p <= high
    pivot = a[p]
    assert all(x <= pivot for x in a[low:p])
    assert all(x >= pivot for x in a[p + 1:high + 1])


@pytest.mark.parametrize(
    "a",
    [
        [5, 3, 8, 1, 9, 2, 7, 4, 6, 0, 11, 10],
        list(range(15)),
        list(range(15, 0, -1)),
        [4] * 12,
        [2, 1, 2, 1, 2, 1, 2, 1, 2, 1, 2],
        [1, 2, 3],
    ],
)
def test_partition_invariant(a: List[int]) -> None:
    before = sorted(a)
    p = qs.partition(a, 0, len(a) - 1)
    _assert_partitioned(a, 0, len(a) - 1, p)
    assert sorted(a) == before


def test_partition_stays_inside_subrange() -> None:
    a = [100, -100] + [6, 2, 9, 4, 7, 1, 8, 3, 5, 0] + [-100, 100]
    p = qs.partition(a, 2, 11)
    assert a[:2] == [100, -100]
    assert a[12:] == [-100, 100]
    _assert_partitioned(a, 2, 11, p)


@settings(deadline=None, max_examples=100)
@given(st.lists(st.integers(min_value=-50, max_value=50), min_size=3, max_size=80))
def test_property_partition_invariant(a: List[int]) -> None:
    before = sorted(a)
    p = qs.partition(a, 0, len(a) - 1)
    _assert_partitioned(a, 0, len(a) - 1, p)
    assert sorted(a) == before


def _max_depth(monkeypatch, a: List[int]) -> int:
    depth = {"cur": 0, "max": 0}
    real = qs._quicksort

    def tracked(seq, low, high, cutoff):
        depth["cur"] += 1
        depth["max"] = max(depth["max"], depth["cur"])
        try:
            real(seq, low, high, cutoff)
        finally:
            depth["cur"] -= 1

    monkeypatch.setattr(qs, "_quicksort", tracked)
    qs.quicksort(a)
    assert a == sorted(a)
    return depth["max"]


@pytest.mark.parametrize("dist", ["sorted", "reversed", "equal", "random"])
def test_recursion_depth_is_logarithmic(monkeypatch, dist: str) -> None:
    n = 10_000
    a = {
        "sorted": list(range(n)),
        "reversed": list(range(n, 0, -1)),
        "equal": [1] * n,
        "random": np.random.default_rng(42).integers(0, 10**6, size=n).tolist(),
    }[dist]
    assert _max_depth(monkeypatch, a) <= math.log2(n) + 1


@pytest.mark.parametrize("cutoff", [2, 3, 5, 10, 32])
def test_custom_cutoffs(cutoff: int) -> None:
    rng = np.random.default_rng(cutoff)
    a = rng.integers(0, 20, size=500).tolist()
    expected = sorted(a)
    qs.sort(a, config={"cutoff": cutoff})
    assert a == expected


@pytest.mark.parametrize("cutoff", [0, 1, -5, 2.5, "10", True])
def test_invalid_cutoff_rejected(cutoff) -> None:
    with pytest.raises(ValueError):
        qs.quicksort([3, 2, 1], cutoff=cutoff)
    with pytest.raises(ValueError):
        qs.sort([3, 2, 1], config={"cutoff": cutoff})


@pytest.mark.parametrize("low, high", [(0, 1), (0, 0), (3, 4), (2, 1)])
def test_partition_rejects_ranges_too_short_for_median_of_three(low: int, high: int) -> None:
    a = [1, 2, 3, 4, 5]
    with pytest.raises(InvalidRangeError):
        qs.partition(a, low, high)
    assert a == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("low, high", [(-1, 3), (0, 5), (2, 9), (0.0, 4)])
def test_partition_rejects_out_of_bounds_ranges(low, high) -> None:
    a = [5, 4, 3, 2, 1]
    with pytest.raises(InvalidRangeError):
        qs.partition(a, low, high)
    assert a == [5, 4, 3, 2, 1]
