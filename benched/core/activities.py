"""Tracking of open and completed activities."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from .models import Activity


class ActivityTracker:
    """Open activities by id plus an append-only list of completed ones.

    Frame bookkeeping is the caller's job: the session checks for an active
    frame and logs misuse before calling in here.
    """

    def __init__(self):
        self._open: Dict[str, Activity] = {}
        self._completed: List[Activity] = []

    def is_open(self, activity_id: str) -> bool:
        return activity_id in self._open

    def start(self, category: str, activity_id: str, frame_index: int, now: float) -> Activity:
        existing = self._open.get(activity_id)
        if existing is not None:
            # first start wins so response time covers the whole wait
            return existing
        activity = Activity(category=category, start_frame=frame_index, start_time=now)
        self._open[activity_id] = activity
        return activity

    def complete(self, activity_id: str, frame_index: int, now: float) -> Optional[Activity]:
        activity = self._open.pop(activity_id, None)
        if activity is None:
            return None
        activity = replace(activity, end_frame=frame_index, end_time=now)
        self._completed.append(activity)
        return activity

    @property
    def open(self) -> Dict[str, Activity]:
        return dict(self._open)

    @property
    def completed(self) -> List[Activity]:
        return list(self._completed)


__all__ = ["ActivityTracker"]
