"""
Helpers shared by the algorithm modules.

Public API (stable):
    swap_references(a, i, j) -> None

Internal:
    check_config(name, config, allowed) -> dict
    check_bounds(a, low, high) -> None
"""

from __future__ import annotations

import numbers
from typing import Any, Dict, Iterable, MutableSequence, Optional

from sortkit.errors import InvalidRangeError

__all__ = ["swap_references", "check_config", "check_bounds"]


def swap_references(a: MutableSequence[Any], i: int, j: int) -> None:
    """Exchange the values held at positions `i` and `j` of `a`."""
    a[i], a[j] = a[j], a[i]


def check_config(
    name: str, config: Optional[Dict[str, Any]], allowed: Iterable[str] = ()
) -> Dict[str, Any]:
    """
    Normalize an algorithm `config` argument.

    `None` becomes `{}`. Anything that is not a dict, or a dict carrying keys
    outside `allowed`, raises ValueError.
    """
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{name}: config must be a dict or None; got {type(config).__name__}")
    unknown = sorted(set(config) - set(allowed))
    if unknown:
        raise ValueError(f"{name}: unknown config keys {unknown}. Allowed: {sorted(allowed)}")
    return config


def check_bounds(a: MutableSequence[Any], low: int, high: int) -> None:
    """
    Validate an inclusive index range `[low, high]` over `a`.

    `low == high + 1` is an empty range and is accepted anywhere in
    `[0, len(a)]`. Everything else must satisfy `0 <= low <= high < len(a)`.
    """
    for name, val in (("low", low), ("high", high)):
        if isinstance(val, bool) or not isinstance(val, numbers.Integral):
            raise InvalidRangeError(f"{name} must be an integer index; got {val!r}")
    n = len(a)
    if low == high + 1 and 0 <= low <= n:
        return
    if low > high + 1:
        raise InvalidRangeError(f"invalid range: low={low} > high+1={high + 1}")
    if low < 0 or high >= n:
        raise InvalidRangeError(f"range [{low}, {high}] outside [0, {n})")
