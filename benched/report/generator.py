"""Build report tables from a session snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.models import Activity, FrameRecord, SessionSnapshot
from ..stats.summary import Summary, summarize
from .formatting import NumberFormat, flag
from .tables import Report, Table, safe_stem

RESPONSE_HEADERS = [
    "Count",
    "Max Response Time (ms)",
    "Avg. Response Time (ms)",
    "5% Response Time (ms)",
    "1% Response Time (ms)",
    "Max Frame Count",
    "Avg. Frame Count",
    "5% Frame Count",
    "1% Frame Count",
]


@dataclass
class ReportConfig:
    """Grouping and health thresholds (thresholds in seconds)."""

    group_size: int = 100
    window_ok_threshold: float = 0.05
    frame_ok_threshold: float = 0.005
    time_scale: float = 1000.0
    number_format: NumberFormat = field(default_factory=NumberFormat)

    def __post_init__(self) -> None:
        if self.group_size <= 0:
            raise ValueError(f"group_size must be positive (got {self.group_size})")


def range_label(start: int, end: int) -> str:
    return f"{start}-{end}"


class ReportGenerator:
    """Turns frames and completed activities into the five report tables."""

    def __init__(self, config: Optional[ReportConfig] = None):
        self.config = config or ReportConfig()
        self.fmt = self.config.number_format.format

    def build(self, snapshot: SessionSnapshot) -> Report:
        return Report(
            session=snapshot.name,
            activities=self.activity_summary(snapshot),
            grouped_activities=self.grouped_activity_summaries(snapshot),
            phases=self.phase_summary(snapshot),
            windowed_frames=self.windowed_frames(snapshot),
            raw_frames=self.raw_frames(snapshot),
        )

    # ------------------------------------------------------------ health flags
    def window_ok(self, durations: Sequence[float]) -> bool:
        return summarize(durations).top5 < self.config.window_ok_threshold

    def frame_ok(self, frame: FrameRecord) -> bool:
        return frame.duration < self.config.frame_ok_threshold

    # -------------------------------------------------------------- activities
    def _response_cells(self, activities: List[Activity]) -> List[str]:
        times = summarize([a.response_time for a in activities if a.response_time is not None])
        frames = summarize([a.response_frames for a in activities if a.response_frames is not None])
        return [str(len(activities))] + self._stat_cells(times.scaled(self.config.time_scale)) + self._stat_cells(frames)

    def _stat_cells(self, summary: Summary) -> List[str]:
        return [self.fmt(summary.max), self.fmt(summary.mean), self.fmt(summary.top5), self.fmt(summary.top1)]

    def activity_summary(self, snapshot: SessionSnapshot) -> Table:
        table = Table(name="activities", headers=["Category"] + RESPONSE_HEADERS)
        for category in snapshot.categories():
            activities = [a for a in snapshot.completed_activities if a.category == category]
            table.add_row([category] + self._response_cells(activities))
        return table

    def grouped_activity_summaries(self, snapshot: SessionSnapshot) -> Dict[str, Table]:
        size = self.config.group_size
        tables: Dict[str, Table] = {}
        for category in snapshot.categories():
            buckets: Dict[int, List[Activity]] = {}
            for activity in snapshot.completed_activities:
                if activity.category == category:
                    buckets.setdefault(activity.start_frame // size, []).append(activity)

            table = Table(name=f"activity_{safe_stem(category)}", headers=["Frame Range"] + RESPONSE_HEADERS)
            for bucket in sorted(buckets):
                start = bucket * size
                table.add_row([range_label(start, start + size)] + self._response_cells(buckets[bucket]))
            tables[category] = table
        return tables

    # ------------------------------------------------------------------ frames
    def phase_summary(self, snapshot: SessionSnapshot) -> Table:
        scale = self.config.time_scale
        table = Table(
            name="frameTime",
            headers=["Phase", "Count", "Max Time (ms)", "Avg. Time (ms)", "5% Time (ms)", "1% Time (ms)"],
        )
        for phase in snapshot.phase_names():
            totals = [f.time_per_phase[phase] for f in snapshot.frames.values() if phase in f.time_per_phase]
            summary = summarize(totals)
            table.add_row([phase, str(summary.count)] + self._stat_cells(summary.scaled(scale)))
        return table

    def windowed_frames(self, snapshot: SessionSnapshot) -> Table:
        size = self.config.group_size
        scale = self.config.time_scale
        phases = snapshot.phase_names()
        metrics = snapshot.metric_names()

        headers = [
            "Frame Range",
            "OK",
            "Max. Frame Time (ms)",
            "Avg. Frame Time (ms)",
            "5% Frame Time (ms)",
            "1% Frame Time (ms)",
        ]
        for phase in phases:
            headers += [f"{phase} (Max)", f"{phase} (Avg)", f"{phase} (5%)", f"{phase} (1%)"]
        for metric in metrics:
            headers += [f"{metric} (Avg)", f"{metric} (Max)", f"{metric} (Total)"]
        table = Table(name=f"frameTime_{size}", headers=headers)

        frames = snapshot.sorted_frames()
        for start in range(0, len(frames), size):
            window = frames[start : start + size]
            durations = [f.duration for f in window]

            row = [range_label(start, start + len(window)), flag(self.window_ok(durations))]
            row += self._stat_cells(summarize(durations).scaled(scale))
            for phase in phases:
                phase_totals = [f.time_per_phase.get(phase, 0.0) for f in window]
                row += self._stat_cells(summarize(phase_totals).scaled(scale))
            for metric in metrics:
                values = summarize([f.metrics.get(metric, 0.0) for f in window])
                row += [self.fmt(values.mean), self.fmt(values.max), self.fmt(values.total)]
            table.add_row(row)
        return table

    def raw_frames(self, snapshot: SessionSnapshot) -> Table:
        scale = self.config.time_scale
        phases = snapshot.phase_names()
        metrics = snapshot.metric_names()
        table = Table(name="raw", headers=["Frame", "OK", "Start", "End", "Duration (ms)"] + phases + metrics)

        for frame in snapshot.sorted_frames():
            row = [
                str(frame.frame_index),
                flag(self.frame_ok(frame)),
                self.fmt(frame.start_time),
                self.fmt(frame.end_time),
                self.fmt(frame.duration * scale),
            ]
            # absent phases took no time; absent metrics were never set
            row += [self.fmt(frame.time_per_phase[p] * scale) if p in frame.time_per_phase else "0" for p in phases]
            row += [self.fmt(frame.metrics[m]) if m in frame.metrics else "-" for m in metrics]
            table.add_row(row)
        return table


__all__ = ["ReportConfig", "ReportGenerator", "range_label", "RESPONSE_HEADERS"]
