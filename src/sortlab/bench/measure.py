"""
Instrumentation for the sorting routines.

Each sort call gets a fresh step counter and a fresh scoped timer. The timer
reads a monotonic high-resolution clock on entry and on exit, and reports the
elapsed time exactly once, on the way out of its `with` block, whether the
block returned normally or raised.

Public API (stable):
    StepCounter
    ScopedTimer
    TimerError
    SortReport
    instrumented(label) -> decorator turning a kernel into a `sort` operation

Report lines, emitted through the caller's sink in this order:
    "<Label> Sort: <steps> iterations"
    "Sorted in <ms>ms."
"""

from __future__ import annotations

import functools
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

__all__ = [
    "Sink",
    "StepCounter",
    "ScopedTimer",
    "TimerError",
    "SortReport",
    "format_steps",
    "format_elapsed",
    "instrumented",
]

logger = logging.getLogger(__name__)

# A sink receives one finished report line (no trailing newline).
Sink = Callable[[str], None]


class TimerError(RuntimeError):
    """Raised when a ScopedTimer is entered more than once."""


class StepCounter:
    """Counts algorithm-defined basic operations for one sort call."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0

    def tick(self, k: int = 1) -> None:
        self.count += k


class ScopedTimer:
    """
    Single-use wall-clock timer for one sort call.

    Usage:
        with ScopedTimer(sink) as timer:
            ...
        timer.elapsed_ms  # float milliseconds, set on exit

    The sink (if any) receives "Sorted in <ms>ms." once, from `__exit__`.
    Exceptions raised inside the block are not suppressed.
    """

    def __init__(self, sink: Optional[Sink] = None) -> None:
        self._sink = sink
        self._t0: Optional[int] = None
        self._released = False
        self.elapsed_ms: Optional[float] = None

    def __enter__(self) -> "ScopedTimer":
        if self._t0 is not None or self._released:
            raise TimerError("ScopedTimer is single-use; create a fresh timer per call")
        self._t0 = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        t1 = time.perf_counter_ns()
        assert self._t0 is not None
        self.elapsed_ms = (t1 - self._t0) / 1e6
        self._released = True
        if self._sink is not None:
            self._sink(format_elapsed(self.elapsed_ms))


@dataclass(frozen=True)
class SortReport:
    method: str
    n: int
    steps: int
    elapsed_ms: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def format_steps(label: str, steps: int) -> str:
    return f"{label} Sort: {steps} iterations"


def format_elapsed(elapsed_ms: float) -> str:
    # %g matches the default float formatting of a plain stream write
    return f"Sorted in {elapsed_ms:g}ms."


def instrumented(label: str) -> Callable[[Callable[[List[int], StepCounter], None]], Callable[..., SortReport]]:
    """
    Wrap a sorting kernel `kernel(a, steps)` into the public operation
    `sort(a, *, sink=None) -> SortReport`.

    The kernel mutates `a` in place and ticks `steps`. The wrapper owns the
    counter and the timer, so every algorithm module reports the same way.
    """

    def decorate(kernel: Callable[[List[int], StepCounter], None]) -> Callable[..., SortReport]:
        @functools.wraps(kernel)
        def sort(a: List[int], *, sink: Optional[Sink] = None) -> SortReport:
            steps = StepCounter()
            timer = ScopedTimer(sink)
            with timer:
                kernel(a, steps)
                if sink is not None:
                    sink(format_steps(label, steps.count))

            assert timer.elapsed_ms is not None
            report = SortReport(method=label, n=len(a), steps=steps.count, elapsed_ms=timer.elapsed_ms)
            logger.debug("%s sort: n=%d steps=%d elapsed_ms=%.4f", label, report.n, report.steps, report.elapsed_ms)
            return report

        return sort

    return decorate
