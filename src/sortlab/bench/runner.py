"""
Comparison sweep: run every configured method on the same inputs and compare
step counts and wall time across sizes.

Usage (from repo root):
    sortlab-bench experiments/compare.yaml
    python -m sortlab.bench.runner experiments/compare.yaml

Config (YAML), all keys required except `repeats` (default 1):
    experiment_name: compare_small
    output_dir: runs
    seed: 0
    repeats: 3
    timeout_seconds: 5.0
    dataset: {dist: shuffled, params: {}}
    sizes: [10, 100, 1000]
    methods: [bubble, selection, insertion, merge, quick]

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per (method, n, trial), plus timeout lines
    - summary.csv             # steps + median/min/max ms per (method, n)
    - (console) rich table + tqdm progress over sizes

Design notes:
- For each size n, we generate ONE dataset and give a fresh copy of it to every
  method on every trial, so step counts are directly comparable.
- Every result is checked with `check_sorted`; a wrong result raises at once.
- A method stops sampling at its first repeat slower than timeout_seconds and
  is skipped for larger sizes. Exceptions from a sort are not caught.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from sortlab.algorithms import get_sort, resolve_method
from sortlab.bench.measure import SortReport
from sortlab.datasets import make_dataset
from sortlab.validate import check_sorted

logger = logging.getLogger(__name__)

_console = Console()

REQUIRED_KEYS = ["experiment_name", "output_dir", "seed", "timeout_seconds", "dataset", "sizes", "methods"]
SUMMARY_COLUMNS = ["method", "n", "steps", "samples_ok", "median_ms", "min_ms", "max_ms"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class MethodEntry:
    name: str
    label: str
    sort_fn: Callable[..., SortReport]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
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
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode("utf-8").strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def _gather_meta() -> Dict[str, Any]:
    import platform
    meta = {
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
    return meta


def _resolve_methods(cfg_methods: List[Any]) -> List[MethodEntry]:
    entries: List[MethodEntry] = []
    seen = set()
    for raw in cfg_methods:
        if not isinstance(raw, str):
            raise ValueError(f"Each method must be a string name; got {raw!r}")
        spec = resolve_method(raw)
        if spec is None:
            raise ValueError(f"Unknown sorting method in config: {raw!r}")
        if spec.name in seen:
            raise ValueError(f"Duplicate method name in config: {spec.name}")
        seen.add(spec.name)
        entries.append(MethodEntry(name=spec.name, label=spec.label, sort_fn=get_sort(spec.name)))
    return entries


def _validate_sizes(raw: Any) -> List[int]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("Config 'sizes' must be a non-empty list of positive integers")
    sizes: List[int] = []
    for n in raw:
        if not isinstance(n, int) or isinstance(n, bool) or n < 1:
            raise ValueError(f"Config 'sizes' must contain positive integers; got {n!r}")
        sizes.append(n)
    return sizes


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "elapsed_ms" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    # Timeout lines carry no per-trial timing
    df = df[df["elapsed_ms"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = (
        df.groupby(["method", "n"], as_index=False)
        .agg(
            steps=("steps", "first"),
            samples_ok=("elapsed_ms", "count"),
            median_ms=("elapsed_ms", "median"),
            min_ms=("elapsed_ms", "min"),
            max_ms=("elapsed_ms", "max"),
        )
    )
    out["steps"] = out["steps"].astype("int64")
    return out.sort_values(["method", "n"], ignore_index=True)[SUMMARY_COLUMNS]


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Sweep Summary (steps / median ms)")
    table.add_column("Method", style="bold")
    picks: List[Tuple[str, int]] = []
    first = sizes[0]
    mid = sizes[len(sizes) // 2]
    last = sizes[-1]
    for npick in dict.fromkeys([first, mid, last]):
        picks.append(("n=" + str(npick), npick))
        table.add_column("n=" + str(npick), justify="right")

    for method in summary["method"].unique():
        row = [f"[bold]{method}[/]"]
        for _, npick in picks:
            s = summary[(summary["method"] == method) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(f"{int(s['steps'].values[0])} / {float(s['median_ms'].values[0]):.3f}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_method(
    entry: MethodEntry,
    base: List[int],
    repeats: int,
    threshold_ms: float,
) -> Tuple[List[SortReport], bool]:
    """
    Sort up to `repeats` fresh copies of `base` with one method.

    Sampling stops at the first repeat slower than `threshold_ms`; that
    report is kept. Returns (reports, timed_out).

    Every result is checked; a wrong result raises AssertionError.
    """
    reports: List[SortReport] = []
    for _ in range(repeats):
        a = list(base)
        report = entry.sort_fn(a)
        check_sorted(base, a)
        reports.append(report)
        if report.elapsed_ms > threshold_ms:
            return reports, True
    return reports, False


def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = _validate_sizes(cfg["sizes"])
    repeats: int = int(cfg.get("repeats", 1))
    timeout_seconds: float = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    methods = _resolve_methods(list(cfg["methods"]))

    if repeats < 1:
        raise ValueError("Config 'repeats' must be >= 1")
    if timeout_seconds <= 0:
        raise ValueError("Config 'timeout_seconds' must be positive")
    if not methods:
        raise ValueError("Config 'methods' must name at least one method")

    # Fail on a bad dataset spec before creating any output
    make_dataset(0, dataset_spec, np.random.default_rng(0))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)

    meta = _gather_meta()
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))

    # Per-method skip flags (set on timeout)
    skip = {m.name: False for m in methods}

    _console.print(f"[bold green]Run directory:[/bold green] {escape(str(run_dir))}")
    _console.print(f"[bold]Experiment:[/bold] {escape(experiment_name)}")
    _console.print(f"[bold]Methods:[/bold] {', '.join(m.label for m in methods)}")
    _console.print()

    threshold_ms = timeout_seconds * 1e3
    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base = make_dataset(n, dataset_spec, rng)

        for m in methods:
            if skip[m.name]:
                continue

            reports, timed_out = run_method(m, base, repeats, threshold_ms)

            for trial, report in enumerate(reports):
                _append_jsonl(
                    {
                        "method": m.label,
                        "n": n,
                        "dataset": dataset_spec,
                        "trial": trial,
                        "steps": report.steps,
                        "elapsed_ms": report.elapsed_ms,
                        "status": "ok",
                    },
                    results_path,
                )

            if timed_out:
                skip[m.name] = True
                logger.warning("%s exceeded %.1fs at n=%d; skipping larger sizes", m.label, timeout_seconds, n)
                _append_jsonl(
                    {
                        "method": m.label,
                        "n": n,
                        "status": "timeout",
                        "timed_out_on_repeat": len(reports) - 1,
                        "slow_elapsed_ms": reports[-1].elapsed_ms,
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    _console.print(f" - {escape(str(results_path))}")
    _console.print(f" - {escape(str(summary_path))}")
    _console.print(f" - {escape(str(meta_path))}")
    _console.print(f" - {escape(str(cfg_resolved_path))}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sortlab-bench",
        description="Compare step counts and timings of the sorting methods from a YAML config.",
    )
    p.add_argument("config", type=str, help="Path to YAML sweep config")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except ValueError as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
