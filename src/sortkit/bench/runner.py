"""
Experiment runner: orchestrates a full benchmarking sweep from a YAML config.

Usage (from repo root):
    python -m sortkit.bench.runner experiments/configs/doubling_random.yaml
    sortkit-bench experiments/configs/doubling_random.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used, with sizes expanded
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample or failure
    - summary.csv             # median + IQR per (algo, n)
    - (console) rich/tqdm progress and summary table

Design notes:
- Sizes come either from an explicit `sizes` list or from
  `doubling: {start, runs}` (start, 2*start, 4*start, ... `runs` sizes).
- For each size n, we generate ONE dataset and give a copy to every algorithm.
- Every timed result is checked for sortedness outside the timed block.
- On timeout/error/unsorted for an algorithm at size n, we skip larger sizes for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from sortkit.algorithms import ALGORITHM_NAMES
from sortkit.bench.measure import time_sort_call
from sortkit.datasets import make_dataset

_console = Console()

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "algorithms",
)

SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[..., None]
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


# ------------------------- helpers: config ------------------------- #

def resolve_sizes(cfg: Dict[str, Any]) -> List[int]:
    """
    Return the list of input sizes for an experiment config.

    Exactly one of `sizes` (list of ints >= 0) or `doubling` ({start, runs})
    must be present.
    """
    has_sizes = "sizes" in cfg
    has_doubling = "doubling" in cfg
    if has_sizes == has_doubling:
        raise ValueError("Config must define exactly one of 'sizes' or 'doubling'")

    if has_sizes:
        sizes = cfg["sizes"]
        if not isinstance(sizes, list) or not sizes:
            raise ValueError("Config 'sizes' must be a non-empty list of integers")
        out = []
        for n in sizes:
            if isinstance(n, bool) or not isinstance(n, int) or n < 0:
                raise ValueError(f"Config 'sizes' entries must be integers >= 0; got {n!r}")
            out.append(n)
        return out

    doubling = cfg["doubling"]
    if not isinstance(doubling, dict):
        raise ValueError("Config 'doubling' must be a mapping with 'start' and 'runs'")
    start = doubling.get("start")
    runs = doubling.get("runs")
    for key, val in (("start", start), ("runs", runs)):
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise ValueError(f"Config 'doubling.{key}' must be an integer >= 1; got {val!r}")
    return [start * 2**k for k in range(runs)]


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    if not isinstance(cfg_algos, list) or not cfg_algos:
        raise ValueError("Config 'algorithms' must be a non-empty list")

    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        if isinstance(entry, str):
            entry = {"name": entry}
        elif not isinstance(entry, dict):
            raise ValueError(f"Algorithm entries must be names or mappings; got {entry!r}")
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name not in ALGORITHM_NAMES:
            raise ValueError(f"Unknown algorithm {name!r}. Available: {list(ALGORITHM_NAMES)}")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        mod = importlib.import_module(f"sortkit.algorithms.{name}")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=getattr(mod, "sort"), config=config))
    return specs


# ------------------------- summary ------------------------- #

def aggregate_summary(samples: List[Dict[str, Any]]) -> pd.DataFrame:
    """Median, IQR, min and max of `time_ns` per (algo, n)."""
    if not samples:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.DataFrame(samples, columns=["algo", "n", "time_ns"])

    out = (
        df.groupby(["algo", "n"])
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            q1=("time_ns", lambda s: s.quantile(0.25)),
            q3=("time_ns", lambda s: s.quantile(0.75)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
        .reset_index()
    )
    out["iqr_ns"] = out["q3"] - out["q1"]
    out = out[SUMMARY_COLUMNS].astype(
        {"median_ns": "int64", "iqr_ns": "int64", "min_ns": "int64", "max_ns": "int64"}
    )
    return out.sort_values(["algo", "n"], ignore_index=True)


def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
    if median_ns is None:
        return "—"
    median_ms = median_ns / 1e6
    if iqr_ns is None:
        return f"{median_ms:.2f}"
    return f"{median_ms:.2f} ± {iqr_ns / 1e6:.2f}"


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")

    # first / middle / last size, deduplicated for short sweeps
    picks: List[int] = list(dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]))
    for npick in picks:
        table.add_column(f"n={npick}", justify="right")

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].values[0]), int(s["iqr_ns"].values[0])))
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = resolve_sizes(cfg)
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos = _resolve_algorithms(cfg["algorithms"])

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    resolved = dict(cfg)
    resolved["sizes"] = sizes
    resolved.pop("doubling", None)
    _write_yaml(resolved, cfg_resolved_path)

    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    # Seeded RNG, owned by this run
    rng = np.random.default_rng(int(cfg["seed"]))

    # Per-algorithm skip flags (set on timeout/error/unsorted)
    per_algo_skip = {a.name: False for a in algos}
    samples: List[Dict[str, Any]] = []

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, dataset_spec, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            res = time_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                record = {"algo": a_spec.name, "n": n, "trial": trial_idx, "time_ns": int(t_ns)}
                samples.append(record)
                _append_jsonl(
                    {**record, "dataset": dataset_spec, "config": a_spec.config},
                    results_path,
                )

            if res["samples_ns"]:
                median_ms = float(np.median(res["samples_ns"])) / 1e6
                _console.print(
                    f"{a_spec.name:>15s}: Time taken for {n:>10d} elements  =>  {median_ms:10.2f} ms"
                )

            status = res["status"]
            if status != "ok":
                per_algo_skip[a_spec.name] = True
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "config": a_spec.config,
                    },
                    results_path,
                )
                _console.print(
                    f"[yellow]{a_spec.name}: {status} at n={n}; skipping larger sizes[/yellow]"
                    + (f" ({escape(res['error'])})" if res["error"] else "")
                )

    summary_df = aggregate_summary(samples)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {escape(repr(e))}")
        raise


if __name__ == "__main__":
    main()
