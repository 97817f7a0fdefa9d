"""
Settings for the interactive sorting demo.

Resolution order (later wins):
    DEFAULTS  <-  YAML file (optional)  <-  command-line overrides

The YAML file is merged key by key into DEFAULTS. Command-line overrides
replace whole top-level values, so `--dist reversed` drops any `params`
the file gave for another distribution.

A YAML file may set any subset of the default keys, for example:

    seed: 42
    size: 20
    method: quick
    dataset:
      dist: nearly_sorted
      params: {swap_frac: 0.1}
    max_print: 200

Unknown keys, badly typed values and dataset specs that `make_dataset` would
reject are all refused here with ValueError, before any prompt is shown.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import numpy as np
import yaml

from sortlab.algorithms import resolve_method
from sortlab.datasets import SUPPORTED_DISTS, make_dataset

__all__ = ["DEFAULTS", "Settings", "load_config", "load_settings", "settings_from_config"]

DEFAULTS: Dict[str, Any] = {
    "seed": 0,
    "size": None,
    "method": None,
    "dataset": {"dist": "shuffled", "params": {}},
    "max_print": 1000,
}


@dataclass(frozen=True)
class Settings:
    seed: int = 0
    size: Optional[int] = None
    method: Optional[str] = None
    dataset: Mapping[str, Any] = field(default_factory=lambda: _freeze_dataset({"dist": "shuffled", "params": {}}))
    max_print: int = 1000


def _freeze_dataset(dataset: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of a dataset spec, params included."""
    params = dataset.get("params") or {}
    frozen = {k: copy.deepcopy(v) for k, v in dataset.items() if k != "params"}
    frozen["params"] = MappingProxyType({k: copy.deepcopy(v) for k, v in params.items()})
    return MappingProxyType(frozen)


def _merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str | Path | None, overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Merge DEFAULTS, the YAML file at `path` (if given) and `overrides`.

    Override entries whose value is None are ignored, so unset CLI flags do
    not clobber values from the file. The others replace the whole value.
    """
    config = copy.deepcopy(DEFAULTS)
    if path:
        with Path(path).open("r", encoding="utf-8") as fh:
            file_cfg = yaml.safe_load(fh) or {}
        if not isinstance(file_cfg, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")
        config = _merge_dict(config, file_cfg)
    if overrides:
        config.update({k: copy.deepcopy(v) for k, v in overrides.items() if v is not None})
    return config


def settings_from_config(cfg: Dict[str, Any]) -> Settings:
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}. Supported: {sorted(DEFAULTS)}")

    seed = cfg["seed"]
    if not _is_int(seed):
        raise ValueError(f"seed must be an integer; got {seed!r}")

    size = cfg["size"]
    if size is not None and (not _is_int(size) or size < 1):
        raise ValueError(f"size must be a positive integer; got {size!r}")

    method = cfg["method"]
    if method is not None:
        if not isinstance(method, str) or resolve_method(method) is None:
            raise ValueError(f"method must be one of bubble, selection, insertion, merge, quick; got {method!r}")
        method = method.strip().lower()

    dataset = cfg["dataset"]
    if not isinstance(dataset, dict) or dataset.get("dist") not in SUPPORTED_DISTS:
        raise ValueError(f"dataset.dist must be one of {sorted(SUPPORTED_DISTS)}; got {dataset!r}")
    # same checks the generator applies, so bad params fail before any prompt
    make_dataset(0, dataset, np.random.default_rng(0))

    max_print = cfg["max_print"]
    if not _is_int(max_print) or max_print < 0:
        raise ValueError(f"max_print must be a nonnegative integer; got {max_print!r}")

    return Settings(seed=seed, size=size, method=method, dataset=_freeze_dataset(dataset), max_print=max_print)


def load_settings(path: str | Path | None = None, overrides: Dict[str, Any] | None = None) -> Settings:
    return settings_from_config(load_config(path, overrides))


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)
