"""Per-phase duration samples for the frame in progress."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple


class SampleStore:
    """Ordered elapsed-duration samples keyed by phase name."""

    def __init__(self):
        self._samples: Dict[str, List[float]] = {}

    def append(self, phase: str, duration: float) -> None:
        self._samples.setdefault(phase, []).append(duration)

    def extend(self, phase: str, durations: Iterable[float]) -> None:
        self._samples.setdefault(phase, []).extend(durations)

    def totals(self) -> Dict[str, float]:
        """Sum of samples per phase; repeated entries add up."""
        return {phase: sum(values) for phase, values in self._samples.items()}

    def clear(self) -> None:
        self._samples.clear()

    def items(self) -> Iterator[Tuple[str, List[float]]]:
        for phase, values in self._samples.items():
            yield phase, list(values)

    def as_dict(self) -> Dict[str, List[float]]:
        return {phase: list(values) for phase, values in self._samples.items()}

    def __len__(self) -> int:
        return len(self._samples)


__all__ = ["SampleStore"]
