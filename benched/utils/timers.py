"""Clock sources and one-off timing helpers."""

from __future__ import annotations

import time
from typing import Callable, TypeVar

from .logging import logger

Clock = Callable[[], float]
T = TypeVar("T")

default_clock: Clock = time.perf_counter


class ManualClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"clock cannot move backwards (got {seconds})")
        self.now += seconds
        return self.now


def benchmark(name: str, fn: Callable[[], T], clock: Clock = default_clock) -> T:
    """Run ``fn`` once and log how long it took."""

    start = clock()
    result = fn()
    duration = clock() - start
    logger.debug("[{name}] {ms:.3f}ms", name=name, ms=duration * 1000)
    return result


def benchmark_iterations(name: str, iterations: int, fn: Callable[[], object], clock: Clock = default_clock) -> float:
    """Run ``fn`` ``iterations`` times and log the mean duration.

    Returns:
        Mean seconds per iteration.
    """

    if iterations <= 0:
        raise ValueError("iterations must be positive")
    start = clock()
    for _ in range(iterations):
        fn()
    duration = (clock() - start) / iterations
    logger.debug("[{name}] {ms:.3f}ms", name=name, ms=duration * 1000)
    return duration


__all__ = ["Clock", "ManualClock", "default_clock", "benchmark", "benchmark_iterations"]
