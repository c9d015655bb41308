"""LIFO stack of open timed sections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class OpenMeasurement:
    phase: str
    start_time: float


class MeasurementStack:
    """Open measurements, closed strictly by position rather than by name."""

    def __init__(self):
        self._entries: List[OpenMeasurement] = []

    def push(self, phase: str, start_time: float) -> None:
        self._entries.append(OpenMeasurement(phase, start_time))

    def pop(self) -> Optional[OpenMeasurement]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[OpenMeasurement]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[OpenMeasurement]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


__all__ = ["MeasurementStack", "OpenMeasurement"]
