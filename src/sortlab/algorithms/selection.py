"""
Selection sort.

For each position i in [0, n-2], scan the unsorted suffix for the minimum and
swap it into position i. The swap runs even when the minimum is already at i.

Steps: one per outer pick plus one per inner comparison, so the count is
data-independent: (n - 1) + n * (n - 1) / 2.
"""

from __future__ import annotations

from typing import List

from sortlab.bench.measure import StepCounter, instrumented

LABEL = "Selection"


def _selection_sort(a: List[int], steps: StepCounter) -> None:
    n = len(a)
    for i in range(n - 1):
        steps.tick()
        current_min = a[i]
        min_idx = i
        for j in range(i + 1, n):
            steps.tick()
            if a[j] < current_min:
                current_min = a[j]
                min_idx = j
        a[min_idx] = a[i]
        a[i] = current_min


sort = instrumented(LABEL)(_selection_sort)
