"""
Property helpers for validating sorting results.

Used by the tests, by bubble sort's pass-termination check, and by the CLI and
sweep runner to fail fast when a sort leaves its sequence in a wrong state.

Public API (stable):
    is_nondecreasing(xs: Sequence[int]) -> bool
    first_nondecreasing_violation_index(xs: Sequence[int]) -> int | None
    is_permutation(a: Sequence[int], b: Sequence[int]) -> bool
    permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> dict[int, int]
    check_sorted(before: Sequence[int], after: Sequence[int]) -> None

Notes
-----
- Stability is *not* checked here because you cannot infer stability from values
  alone when equal keys are indistinguishable. The stability test tags items
  with tie-breaker IDs and checks relative order of equal keys.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence


__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "check_sorted",
]


def is_nondecreasing(xs: Sequence[int]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for all i."""
    n = len(xs)
    if n < 2:
        return True
    return all(xs[i] <= xs[i + 1] for i in range(n - 1))


def first_nondecreasing_violation_index(xs: Sequence[int]) -> int | None:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    n = len(xs)
    for i in range(n - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of values.
    """
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    Positive values indicate extra occurrences in `a`, negative in `b`.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[int, int] = {}
    for k in set(ca.keys()) | set(cb.keys()):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def check_sorted(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Assert that `after` is a nondecreasing permutation of `before`.

    Raises AssertionError with a concise message naming the first problem.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Sort changed the length from {len(before)} to {len(after)}"
        )
    i = first_nondecreasing_violation_index(after)
    if i is not None:
        raise AssertionError(
            f"Not nondecreasing at index {i}: {after[i]} > {after[i + 1]}"
        )
    diff = permutation_counter_diff(before, after)
    if diff:
        raise AssertionError(f"Sort is not a permutation of its input (count diff: {diff})")
