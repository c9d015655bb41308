"""Benchmark session: frame lifecycle, phase timing, activities and metrics."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from ..utils.logging import session_logger
from ..utils.timers import Clock, default_clock
from .activities import ActivityTracker
from .models import Activity, FrameRecord, SessionSnapshot
from .samples import SampleStore
from .stack import MeasurementStack, OpenMeasurement

T = TypeVar("T")


class BenchmarkSession:
    """Collects per-frame timings, custom metrics and activities.

    A session is driven from a single execution context. Misuse (ending a
    frame that never started, closing a measurement that was never opened,
    completing an unknown activity) is logged and ignored.
    """

    def __init__(self, name: str, clock: Optional[Clock] = None):
        self.name = name
        self.clock: Clock = clock or default_clock
        self.log = session_logger(name)

        self._samples = SampleStore()
        self._stack = MeasurementStack()
        self._activities = ActivityTracker()
        self._metrics: Dict[str, float] = {}
        self._frames: Dict[int, FrameRecord] = {}

        self._frame_start: Optional[float] = None
        self._frame_index: Optional[int] = None

    # ------------------------------------------------------------------ frames
    @property
    def current_frame(self) -> Optional[int]:
        return self._frame_index

    def start_frame(self, frame_index: int) -> None:
        self._frame_start = self.clock()
        self._frame_index = frame_index
        self._samples.clear()
        self._stack.clear()
        self._metrics.clear()

    def end_frame(self) -> Optional[FrameRecord]:
        if self._frame_start is None or self._frame_index is None:
            self.log.error("end_frame called without an active frame")
            return None

        while self._stack:
            leftover = self._stack.peek()
            self.log.error("active measurement while ending frame: {phase}", phase=leftover.phase)
            self.end_measurement()

        end_time = self.clock()
        if self._frame_index in self._frames:
            self.log.warning("frame {index} recorded twice; keeping the newer one", index=self._frame_index)

        frame = FrameRecord(
            frame_index=self._frame_index,
            start_time=self._frame_start,
            end_time=end_time,
            time_per_phase=self._samples.totals(),
            metrics=dict(self._metrics),
        )
        self._frames[self._frame_index] = frame
        self._frame_start = None
        self._frame_index = None
        return frame

    @property
    def frames(self) -> Dict[int, FrameRecord]:
        return dict(self._frames)

    # ------------------------------------------------------------ measurements
    def start_measurement(self, phase: str) -> None:
        self._stack.push(phase, self.clock())

    def end_measurement(self) -> Optional[float]:
        end_time = self.clock()
        entry = self._stack.pop()
        if entry is None:
            self.log.error("attempting to end non-existent measurement")
            return None
        elapsed = end_time - entry.start_time
        self._samples.append(entry.phase, elapsed)
        return elapsed

    @contextmanager
    def measure(self, phase: str) -> Iterator[None]:
        """Time the enclosed block under ``phase``; closes even on error."""
        self.start_measurement(phase)
        try:
            yield
        finally:
            self.end_measurement()

    def benchmark(self, phase: str, fn: Callable[[], T]) -> T:
        with self.measure(phase):
            return fn()

    @property
    def phase_samples(self) -> Dict[str, List[float]]:
        return self._samples.as_dict()

    @property
    def active_measurements(self) -> List[OpenMeasurement]:
        return self._stack.entries()

    def copy_results(self, other: "BenchmarkSession") -> None:
        """Append another session's phase samples to this one."""
        for phase, samples in other._samples.items():
            self._samples.extend(phase, samples)

    # ----------------------------------------------------------------- metrics
    def set_metric(self, name: str, value: float) -> None:
        self._metrics[name] = value

    def update_metric(self, name: str, initial_value: float, update: Callable[[float], float]) -> float:
        value = update(self._metrics.get(name, initial_value))
        self._metrics[name] = value
        return value

    @property
    def metrics(self) -> Dict[str, float]:
        return dict(self._metrics)

    # -------------------------------------------------------------- activities
    def start_activity(self, category: str, activity_id: str) -> None:
        if self._activities.is_open(activity_id):
            return
        if self._frame_index is None:
            self.log.error("trying to start activity {id} with no frame data", id=activity_id)
            return
        self._activities.start(category, activity_id, self._frame_index, self.clock())

    def complete_activity(self, activity_id: str) -> Optional[Activity]:
        if self._frame_index is None:
            self.log.error("trying to end activity {id} with no frame data", id=activity_id)
            return None
        if not self._activities.is_open(activity_id):
            self.log.error("missing activity: {id}", id=activity_id)
            return None
        return self._activities.complete(activity_id, self._frame_index, self.clock())

    @property
    def open_activities(self) -> Dict[str, Activity]:
        return self._activities.open

    @property
    def completed_activities(self) -> List[Activity]:
        return self._activities.completed

    # --------------------------------------------------------------- reporting
    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            name=self.name,
            frames=dict(self._frames),
            completed_activities=self._activities.completed,
        )

    def summary_counts(self) -> Tuple[int, int, int]:
        """Frames recorded, activities completed, activities still open."""
        return len(self._frames), len(self._activities.completed), len(self._activities.open)


__all__ = ["BenchmarkSession"]
