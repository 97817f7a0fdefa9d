"""
Insertion sort.

For each i in [1, n-1], lift a[i] out and shift every strictly greater element
of the sorted prefix a[0:i] one slot right, then drop the lifted value into the
gap. Equal elements are never shifted past each other.

Steps: one per outer iteration plus one per shift, i.e. (n - 1) + inversions.
Already-sorted input therefore costs exactly n - 1 steps.
"""

from __future__ import annotations

from typing import List

from sortlab.bench.measure import StepCounter, instrumented

LABEL = "Insertion"


def _insertion_sort(a: List[int], steps: StepCounter) -> None:
    for i in range(1, len(a)):
        steps.tick()
        key = a[i]
        j = i - 1
        while j >= 0 and a[j] > key:
            steps.tick()
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = key


sort = instrumented(LABEL)(_insertion_sort)
