"""
Bubble sort.

Repeated left-to-right passes over adjacent pairs, swapping any out-of-order
pair. One step is counted per pair examined, not per swap.

Termination is decided by a full sortedness check after each pass rather than
by a "no swap happened" flag. This is a known inefficiency: the extra O(n)
check runs after every pass, and the last pass always re-scans the whole
sequence even when nothing moved. It is kept because the reported step counts
depend on it: every pass costs exactly n - 1 steps, and at least one pass is
made whenever n >= 2.
"""

from __future__ import annotations

from typing import List

from sortlab.bench.measure import StepCounter, instrumented
from sortlab.validate.properties import is_nondecreasing

LABEL = "Bubble"


def _bubble_sort(a: List[int], steps: StepCounter) -> None:
    n = len(a)
    while True:
        for i in range(n - 1):
            steps.tick()
            if a[i] > a[i + 1]:
                a[i], a[i + 1] = a[i + 1], a[i]
        if is_nondecreasing(a):
            return


sort = instrumented(LABEL)(_bubble_sort)
