"""
Top-down merge sort.

The half-open range [lo, hi) is split at mid = (lo + hi) // 2 until runs have
length <= 1. Adjacent runs are merged through temporary copies of both runs
and written back into the caller's list, so extra storage is proportional to
the run being merged.

On equal keys the element from the left run is taken first, so the sort is
stable. Only `<` is used to compare elements.

Steps: one per element placed during merging, leftovers included.
"""

from __future__ import annotations

from typing import List

from sortlab.bench.measure import StepCounter, instrumented

LABEL = "Merge"


def _merge(a: List[int], lo: int, mid: int, hi: int, steps: StepCounter) -> None:
    left = a[lo:mid]
    right = a[mid:hi]
    i = j = 0
    k = lo
    while i < len(left) and j < len(right):
        # strict `<` keeps ties on the left run
        if right[j] < left[i]:
            a[k] = right[j]
            j += 1
        else:
            a[k] = left[i]
            i += 1
        k += 1
        steps.tick()
    while i < len(left):
        a[k] = left[i]
        i += 1
        k += 1
        steps.tick()
    while j < len(right):
        a[k] = right[j]
        j += 1
        k += 1
        steps.tick()


def _merge_range(a: List[int], lo: int, hi: int, steps: StepCounter) -> None:
    if hi - lo <= 1:
        return
    mid = (lo + hi) // 2
    _merge_range(a, lo, mid, steps)
    _merge_range(a, mid, hi, steps)
    _merge(a, lo, mid, hi, steps)


def _merge_sort(a: List[int], steps: StepCounter) -> None:
    _merge_range(a, 0, len(a), steps)


sort = instrumented(LABEL)(_merge_sort)
