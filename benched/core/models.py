"""Plain records produced by a benchmark session."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


@dataclass(frozen=True)
class FrameRecord:
    """Immutable snapshot of one finished frame."""

    frame_index: int
    start_time: float
    end_time: float
    time_per_phase: Mapping[str, float] = field(default_factory=dict)
    metrics: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_per_phase", MappingProxyType(dict(self.time_per_phase)))
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class Activity:
    """A unit of responsiveness work that may span several frames."""

    category: str
    start_frame: int
    start_time: float
    end_frame: Optional[int] = None
    end_time: Optional[float] = None

    @property
    def completed(self) -> bool:
        return self.end_time is not None

    @property
    def response_time(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def response_frames(self) -> Optional[int]:
        if self.end_frame is None:
            return None
        return self.end_frame - self.start_frame


@dataclass(frozen=True)
class SessionSnapshot:
    """Copy of the report-relevant session state."""

    name: str
    frames: Dict[int, FrameRecord]
    completed_activities: List[Activity]

    def sorted_frames(self) -> List[FrameRecord]:
        return [self.frames[idx] for idx in sorted(self.frames)]

    def phase_names(self) -> List[str]:
        return sorted({phase for frame in self.frames.values() for phase in frame.time_per_phase})

    def metric_names(self) -> List[str]:
        return sorted({metric for frame in self.frames.values() for metric in frame.metrics})

    def categories(self) -> List[str]:
        return sorted({activity.category for activity in self.completed_activities})


__all__ = ["FrameRecord", "Activity", "SessionSnapshot"]
