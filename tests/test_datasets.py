from __future__ import annotations

import numpy as np
import pytest

from sortkit.datasets import DEFAULT_RANGE, SUPPORTED_DISTS, make_dataset


def _rng(seed: int = 42) -> np.random.Generator:
    return np.random.default_rng(seed)


def test_supported_dists() -> None:
    assert SUPPORTED_DISTS == {"random", "sorted", "reversed", "nearly_sorted", "few_uniques"}


@pytest.mark.parametrize("dist", sorted(SUPPORTED_DISTS))
def test_zero_length(dist: str) -> None:
    params = {"k": 3} if dist == "few_uniques" else {}
    assert make_dataset(0, {"dist": dist, "params": params}, _rng()) == []


def test_random_uses_inclusive_range() -> None:
    out = make_dataset(2000, {"dist": "random", "params": {"range": [-2, 2]}}, _rng())
    assert len(out) == 2000
    assert set(out) == {-2, -1, 0, 1, 2}
    assert all(type(x) is int for x in out)


def test_random_default_range() -> None:
    out = make_dataset(500, {"dist": "random"}, _rng())
    lo, hi = DEFAULT_RANGE
    assert all(lo <= x <= hi for x in out)


def test_random_is_reproducible_for_a_seed() -> None:
    spec = {"dist": "random", "params": {"range": [0, 10**6]}}
    assert make_dataset(100, spec, _rng(1)) == make_dataset(100, spec, _rng(1))
    assert make_dataset(100, spec, _rng(1)) != make_dataset(100, spec, _rng(2))


def test_sorted_and_reversed() -> None:
    assert make_dataset(5, {"dist": "sorted"}, _rng()) == [0, 1, 2, 3, 4]
    assert make_dataset(5, {"dist": "reversed"}, _rng()) == [4, 3, 2, 1, 0]


def test_nearly_sorted_is_a_permutation() -> None:
    out = make_dataset(1000, {"dist": "nearly_sorted", "params": {"swap_frac": 0.01}}, _rng())
    assert sorted(out) == list(range(1000))
    displaced = sum(1 for i, x in enumerate(out) if i != x)
    assert 0 < displaced <= 2 * 10


def test_nearly_sorted_zero_swaps() -> None:
    out = make_dataset(50, {"dist": "nearly_sorted", "params": {"swap_frac": 0.0}}, _rng())
    assert out == list(range(50))


def test_few_uniques() -> None:
    out = make_dataset(1000, {"dist": "few_uniques", "params": {"k": 5, "range": [10, 20]}}, _rng())
    assert len(out) == 1000
    assert len(set(out)) <= 5
    assert all(10 <= x <= 20 for x in out)


def test_few_uniques_k_capped_by_span() -> None:
    out = make_dataset(200, {"dist": "few_uniques", "params": {"k": 50, "range": [0, 2]}}, _rng())
    assert set(out) <= {0, 1, 2}


@pytest.mark.parametrize(
    "n, spec",
    [
        (-1, {"dist": "sorted"}),
        (1.5, {"dist": "sorted"}),
        (True, {"dist": "sorted"}),
        (5, "sorted"),
        (5, {"dist": "bogus"}),
        (5, {"dist": "random", "params": {"range": [5, 1]}}),
        (5, {"dist": "random", "params": {"range": [1]}}),
        (5, {"dist": "random", "params": {"range": [0.5, 2]}}),
        (5, {"dist": "nearly_sorted", "params": {"swap_frac": 1.5}}),
        (5, {"dist": "nearly_sorted", "params": {"swap_frac": "lots"}}),
        (5, {"dist": "few_uniques", "params": {}}),
        (5, {"dist": "few_uniques", "params": {"k": 0}}),
        (5, {"dist": "sorted", "params": [1, 2]}),
    ],
)
def test_invalid_inputs(n, spec) -> None:
    with pytest.raises(ValueError):
        make_dataset(n, spec, _rng())
