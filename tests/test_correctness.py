"""
Correctness tests for the five sorting methods.

What we check, for every method:
- Result is nondecreasing and a permutation of the input
- The sort happens in place (the caller's list is the one sorted)
- Already-sorted input comes back unchanged
- Empty and singleton inputs report zero steps
- Merge sort keeps equal keys in input order
"""

from __future__ import annotations

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from sortlab.algorithms import METHODS, get_sort
from sortlab.validate import is_nondecreasing, is_permutation

ALL_METHODS = sorted(METHODS)


# ------------------------- helpers ------------------------- #

def _check_one(method: str, a: List[int]) -> None:
    """Common assertion bundle for one input."""
    sort = get_sort(method)
    original = list(a)
    target = a
    report = sort(a)

    assert a is target
    assert a == sorted(original), f"{method}: output must match sorted()"
    assert is_nondecreasing(a), f"{method}: output is not nondecreasing"
    assert is_permutation(original, a), f"{method}: output is not a permutation of input"
    assert report.n == len(original)
    assert report.steps >= 0
    assert report.elapsed_ms >= 0.0


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("method", ALL_METHODS)
@pytest.mark.parametrize(
    "a",
    [
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        [3, 1, 4, 5, 2],
        list(range(20)),
        list(range(20))[::-1],
        [0, -1, 5, -10, 3, 3, 2],
    ],
)
def test_unit_cases(method: str, a: List[int]) -> None:
    _check_one(method, a)


@pytest.mark.parametrize("method", ALL_METHODS)
@pytest.mark.parametrize("a", [[], [42]])
def test_empty_and_singleton_take_zero_steps(method: str, a: List[int]) -> None:
    before = list(a)
    report = get_sort(method)(a)
    assert a == before
    assert report.steps == 0


@pytest.mark.parametrize("method", ALL_METHODS)
def test_sorted_input_is_left_unchanged(method: str) -> None:
    a = [1, 2, 2, 5, 9, 12]
    get_sort(method)(a)
    assert a == [1, 2, 2, 5, 9, 12]


@pytest.mark.parametrize("method", ALL_METHODS)
def test_sorting_twice_is_idempotent(method: str) -> None:
    sort = get_sort(method)
    a = [5, 3, 8, 1, 9, 2]
    sort(a)
    once = list(a)
    sort(a)
    assert a == once


def test_quick_sort_handles_large_sorted_input() -> None:
    # Worst case for the last-element pivot; must not hit the recursion limit
    a = list(range(1500))
    report = get_sort("quick")(a)
    assert a == list(range(1500))
    assert report.steps == 1500 * 1499 // 2


class _Tagged:
    """Value with a tie-breaker tag that does not take part in comparisons."""

    def __init__(self, key: int, tag: int) -> None:
        self.key = key
        self.tag = tag

    def __lt__(self, other: "_Tagged") -> bool:
        return self.key < other.key

    def __le__(self, other: "_Tagged") -> bool:
        return self.key <= other.key


def test_merge_sort_is_stable() -> None:
    keys = [3, 1, 3, 2, 1, 3, 2, 1]
    items = [_Tagged(k, i) for i, k in enumerate(keys)]
    get_sort("merge")(items)

    assert [x.key for x in items] == sorted(keys)
    for k in set(keys):
        tags = [x.tag for x in items if x.key == k]
        assert tags == sorted(tags), f"equal keys {k} reordered: {tags}"


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@pytest.mark.parametrize("method", ALL_METHODS)
@settings(deadline=None, max_examples=60)
@given(a=st.lists(small_ints, min_size=0, max_size=120))
def test_property_random_small_range(method: str, a: List[int]) -> None:
    _check_one(method, a)


@pytest.mark.parametrize("method", ALL_METHODS)
@settings(deadline=None, max_examples=40)
@given(a=st.lists(st.integers(min_value=0, max_value=5), min_size=0, max_size=150))
def test_property_many_duplicates(method: str, a: List[int]) -> None:
    _check_one(method, a)


@settings(deadline=None, max_examples=60)
@given(a=st.lists(st.integers(min_value=0, max_value=4), min_size=0, max_size=80))
def test_property_merge_sort_stability(a: List[int]) -> None:
    items = [_Tagged(k, i) for i, k in enumerate(a)]
    get_sort("merge")(items)
    pairs = [(x.key, x.tag) for x in items]
    assert pairs == sorted(pairs)
