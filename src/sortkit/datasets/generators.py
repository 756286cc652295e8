"""
Dataset generators for the sorting benchmarks.

Distributions:
- "random":
    Integers drawn uniformly from an inclusive range. The default range
    [0, 999999] matches the benchmark's historical input.

- "sorted":
    [0, 1, ..., n-1]. Best case for insertion sort.

- "reversed":
    [n-1, n-2, ..., 0]. Worst case for insertion sort and the classic
    adversarial input for a first-element-pivot quicksort.

- "nearly_sorted":
    Start from [0, 1, ..., n-1] then perform ceil(swap_frac * n) random
    index swaps.

- "few_uniques":
    Up to k distinct values from an inclusive range, sampled uniformly into
    n slots. Stresses duplicate handling in partition and merge.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges are written as params["range"] == [min_int, max_int], inclusive.
- The caller owns and seeds the RNG; deterministic distributions ignore it.
- Returns a plain `list[int]` so the algorithms never see NumPy types.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import numpy as np

DEFAULT_RANGE: Tuple[int, int] = (0, 999_999)

__all__ = ["SUPPORTED_DISTS", "DEFAULT_RANGE", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "random", "params": {"range": [0, 999999]}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "few_uniques", "params": {"k": 10, "range": [0, 100]}}
            {"dist": "sorted"}
            {"dist": "reversed"}

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in _GENERATORS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    return _GENERATORS[dist](int(n), params, rng)


# ------------------------- distributions ------------------------- #


def _random(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    lo, hi = _parse_range(params, "random")
    # Generator.integers is half-open by default
    return rng.integers(lo, hi, size=n, endpoint=True, dtype=np.int64).tolist()


def _sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n))


def _reversed(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


def _nearly_sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    swap_frac = _parse_swap_frac(params)
    arr = list(range(n))
    num_swaps = int(np.ceil(swap_frac * n))
    if n == 0 or num_swaps == 0:
        return arr
    idxs = rng.integers(0, n, size=(num_swaps, 2))
    for i, j in idxs.tolist():
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _few_uniques(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    k = _parse_k(params)
    lo, hi = _parse_range(params, "few_uniques")
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    # Sample without replacement from the span; offsets keep huge spans cheap.
    values = (lo + rng.choice(hi - lo + 1, size=actual_k, replace=False)).tolist()
    picks = rng.integers(0, actual_k, size=n)
    return [values[t] for t in picks.tolist()]


_GENERATORS: Dict[str, Callable[[int, Dict[str, Any], np.random.Generator], List[int]]] = {
    "random": _random,
    "sorted": _sorted,
    "reversed": _reversed,
    "nearly_sorted": _nearly_sorted,
    "few_uniques": _few_uniques,
}

SUPPORTED_DISTS = frozenset(_GENERATORS)


# ------------------------- helpers ------------------------- #


def _parse_range(params: Dict[str, Any], dist: str) -> Tuple[int, int]:
    """
    Parse params["range"] == [min_int, max_int] (inclusive), or DEFAULT_RANGE.
    """
    if "range" not in params:
        return DEFAULT_RANGE
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not _is_int_like(k) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _is_int_like(x: Any) -> bool:
    # Python ints and NumPy integer types, but not bools
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
