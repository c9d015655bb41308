"""Summary statistics over timing samples.

Tail averages describe the worst case: the samples are sorted by descending
value and the largest ``max(1, floor(n * p))`` of them are averaged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

TOP_5 = 0.05
TOP_1 = 0.01


def _descending(samples: Sequence[float]) -> np.ndarray:
    return np.sort(np.asarray(samples, dtype=np.float64))[::-1]


def tail_count(count: int, fraction: float) -> int:
    return max(1, int(count * fraction))


def tail_average(samples: Sequence[float], fraction: float) -> float:
    values = _descending(samples)
    if values.size == 0:
        return 0.0
    return float(values[: tail_count(values.size, fraction)].mean())


@dataclass(frozen=True)
class Summary:
    count: int = 0
    total: float = 0.0
    mean: float = 0.0
    max: float = 0.0
    top5: float = 0.0
    top1: float = 0.0

    def scaled(self, factor: float) -> "Summary":
        """Same summary with every value (not the count) multiplied by ``factor``."""
        return Summary(
            count=self.count,
            total=self.total * factor,
            mean=self.mean * factor,
            max=self.max * factor,
            top5=self.top5 * factor,
            top1=self.top1 * factor,
        )


def summarize(samples: Sequence[float]) -> Summary:
    values = _descending(samples)
    if values.size == 0:
        return Summary()
    total = float(values.sum())
    return Summary(
        count=int(values.size),
        total=total,
        mean=total / values.size,
        max=float(values[0]),
        top5=float(values[: tail_count(values.size, TOP_5)].mean()),
        top1=float(values[: tail_count(values.size, TOP_1)].mean()),
    )


__all__ = ["Summary", "summarize", "tail_average", "tail_count", "TOP_5", "TOP_1"]
