"""
Quick sort with a Lomuto partition.

The last element of each range is the pivot. After partitioning, elements
smaller than the pivot precede it and elements greater than or equal to it
follow. Not stable.

Sub-ranges are kept on an explicit work stack instead of the call stack:
sorted input degrades to O(n^2) with O(n) pending ranges, which would exceed
the interpreter recursion limit for a few thousand elements.

Steps: one per comparison against the pivot. Sorted input costs n * (n - 1) / 2.
"""

from __future__ import annotations

from typing import List, Tuple

from sortlab.bench.measure import StepCounter, instrumented

LABEL = "Quick"


def _partition(a: List[int], lo: int, hi: int, steps: StepCounter) -> int:
    """Partition a[lo:hi + 1] around a[hi]; return the pivot's final index."""
    pivot = a[hi]
    i = lo
    for j in range(lo, hi):
        steps.tick()
        if a[j] < pivot:
            a[i], a[j] = a[j], a[i]
            i += 1
    a[i], a[hi] = a[hi], a[i]
    return i


def _quick_sort(a: List[int], steps: StepCounter) -> None:
    pending: List[Tuple[int, int]] = [(0, len(a) - 1)]
    while pending:
        lo, hi = pending.pop()
        if hi - lo < 1:
            continue
        p = _partition(a, lo, hi, steps)
        # push the right range first so the left one is handled first
        pending.append((p + 1, hi))
        pending.append((lo, p - 1))


sort = instrumented(LABEL)(_quick_sort)
