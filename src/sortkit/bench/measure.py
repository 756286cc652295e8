"""
Timing harness for sorting algorithms.

We measure exactly one call to an algorithm's in-place `sort(a, config=...)`
per sample, using a monotonic high-resolution clock. Copying the input,
GC control, warmup and the sortedness check all happen outside the timed
block.

Public API (stable):
    time_sort_call(... ) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error" | "unsorted",
        "error": str | None,                # populated unless status == "ok"/"timeout"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, Optional

from sortkit.validate.properties import first_nondecreasing_violation_index

__all__ = ["time_sort_call"]


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., None],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    verify: bool = True,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(copy_of_a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for logs/records).
    algo_fn : Callable[..., None]
        Callable implementing sort(a: list, *, config: dict | None) -> None,
        which sorts its argument in place.
    a : list
        Input array. Never passed to `algo_fn` directly; every call gets a
        fresh copy made outside the timed block, so `a` is left untouched.
    config : dict | None
        Algorithm configuration passed through unchanged.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample timeout threshold. If a single call exceeds this threshold,
        we mark status="timeout" and stop further sampling.
    verify : bool
        If True, check every sorted copy is nondecreasing; the first failure
        sets status="unsorted" and stops sampling. The warmup
        output is checked the same way.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    # ---- Warmup (outside GC disable & outside timed block) ----
    if warmup and repeats > 0:
        try:
            warm_input = list(a)
            algo_fn(warm_input, config=config)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result
        if verify:
            k = first_nondecreasing_violation_index(warm_input)
            if k is not None:
                result["status"] = "unsorted"
                result["error"] = (
                    f"not sorted afterward at warmup: "
                    f"a[{k}]={warm_input[k]!r} > a[{k + 1}]={warm_input[k + 1]!r}"
                )
                return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            if verify:
                k = first_nondecreasing_violation_index(arg)
                if k is not None:
                    result["status"] = "unsorted"
                    result["error"] = (
                        f"not sorted afterward at repeat {r}: "
                        f"a[{k}]={arg[k]!r} > a[{k + 1}]={arg[k + 1]!r}"
                    )
                    break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))

            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break

    finally:
        # Leave GC disabled if the caller had it disabled
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
