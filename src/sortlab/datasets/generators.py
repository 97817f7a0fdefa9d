"""
Sequence generators for the sorting demos.

Currently implemented:
- dist == "shuffled":
    A permutation of [1, 2, ..., n] shuffled with the provided RNG.
    This is what the interactive program sorts.

- dist == "sorted":
    Deterministic increasing order [1, 2, ..., n].

- dist == "reversed":
    Deterministic decreasing order [n, n-1, ..., 1].

- dist == "nearly_sorted":
    Start from [1, 2, ..., n] then perform ceil(swap_frac * n) random index
    swaps using the provided RNG.

- dist == "few_uniques":
    Fill the sequence with values drawn uniformly from [1, k] (k defaults to 5).
    Lots of equal keys, useful for watching how the step counts react to
    duplicates.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    make_sequence(n: int, seed: int = 0, spec: dict | None = None) -> list[int]

Conventions:
- Returns a Python `list[int]` (algorithms stay NumPy-agnostic).
- The caller supplies the RNG (for reproducibility across runs), except for
  `make_sequence`, which seeds its own. The interactive demo goes through
  `make_sequence`.
- "sorted" and "reversed" ignore params and RNG.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

import numpy as np

SUPPORTED_DISTS = {
    "shuffled",
    "sorted",
    "reversed",
    "nearly_sorted",
    "few_uniques",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset", "make_sequence"]


def make_dataset(n: int, spec: Mapping[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer sequence according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : Mapping
        Distribution specification, e.g.

            {"dist": "shuffled", "params": {}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}  # in [0.0, 1.0]
            {"dist": "few_uniques", "params": {"k": 5}}               # k >= 1, default 5

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
    _validate_n(n)

    if not isinstance(spec, Mapping):
        raise ValueError("spec must be a mapping")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, Mapping):
        raise ValueError("spec.params must be a mapping if provided")

    if dist == "shuffled":
        if n == 0:
            return []
        arr = np.arange(1, n + 1, dtype=np.int64)
        rng.shuffle(arr)
        return arr.tolist()

    if dist == "sorted":
        return list(range(1, n + 1))

    if dist == "reversed":
        return list(range(n, 0, -1))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(1, n + 1))
        if n == 0:
            return arr
        # ceil so a small nonzero frac makes at least one swap
        num_swaps = int(np.ceil(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            # i == j is a no-op; effective swaps may be fewer than requested
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "few_uniques":
        k = _parse_k(params)
        if n == 0:
            return []
        arr = rng.integers(1, k + 1, size=n, dtype=np.int64)
        return arr.tolist()

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


def make_sequence(n: int, seed: int = 0, spec: Optional[Mapping[str, Any]] = None) -> List[int]:
    """Sequence from a freshly seeded generator; a shuffled 1..n unless `spec` says otherwise."""
    rng = np.random.default_rng(seed)
    return make_dataset(n, spec if spec is not None else {"dist": "shuffled"}, rng)


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_swap_frac(params: Mapping[str, Any]) -> float:
    """
    Parse and validate swap_frac in [0.0, 1.0] for nearly_sorted.
    Default to 0.05 if not provided.
    """
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _parse_k(params: Mapping[str, Any]) -> int:
    """
    Parse and validate k (number of distinct values) for few_uniques.
    Must be an integer >= 1. Default to 5 if not provided.
    """
    k = params.get("k", 5)
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k
