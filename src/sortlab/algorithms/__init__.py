"""
Sorting algorithms public API.

Every algorithm lives in its own module `sortlab.algorithms.<name>` and defines
a callable `sort(a, *, sink=None) -> SortReport` that sorts `a` in place.

The method table is immutable and maps the normalized (lower-cased) method
name to its menu label and module:

    from sortlab.algorithms import METHOD_LABELS, resolve_method, get_sort
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from sortlab.bench.measure import SortReport

__all__ = [
    "MethodSpec",
    "METHODS",
    "METHOD_LABELS",
    "normalize_method",
    "resolve_method",
    "get_sort",
]


@dataclass(frozen=True)
class MethodSpec:
    name: str
    label: str
    module: str


METHOD_LABELS: Tuple[str, ...] = ("Bubble", "Selection", "Insertion", "Merge", "Quick")

METHODS: Mapping[str, MethodSpec] = MappingProxyType(
    {
        label.lower(): MethodSpec(name=label.lower(), label=label, module=f"sortlab.algorithms.{label.lower()}")
        for label in METHOD_LABELS
    }
)


def normalize_method(name: str) -> str:
    return name.strip().lower()


def resolve_method(name: str) -> Optional[MethodSpec]:
    """Case-insensitive lookup; None if `name` is not one of the five methods."""
    return METHODS.get(normalize_method(name))


def get_sort(name: str) -> Callable[..., SortReport]:
    """
    Return the `sort` callable for a method name (case-insensitive).

    Raises
    ------
    ValueError
        If the name is not a known method.
    """
    spec = resolve_method(name)
    if spec is None:
        raise ValueError(f"Unknown sorting method: {name!r}. Supported: {list(METHODS)}")
    mod = importlib.import_module(spec.module)
    return getattr(mod, "sort")
