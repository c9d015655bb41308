"""Synthetic frame loop for exercising sessions and exports."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tqdm import tqdm

from ..core.registry import SessionRegistry
from ..core.session import BenchmarkSession
from ..utils.timers import ManualClock


@dataclass
class SyntheticConfig:
    frames: int = 300
    phases: Dict[str, float] = field(default_factory=lambda: {"update": 0.002, "render": 0.004})
    jitter: float = 0.5
    activity_categories: List[str] = field(default_factory=lambda: ["click", "scroll"])
    activity_rate: float = 0.1
    max_activity_frames: int = 5
    simulate: bool = True
    seed: Optional[int] = None
    progress: bool = True


class SyntheticDriver:
    """Drives a session through ``frames`` frames of randomised phase work.

    In simulate mode time comes from a :class:`ManualClock` and nothing sleeps.
    """

    def __init__(self, config: SyntheticConfig, session: Optional[BenchmarkSession] = None):
        self.config = config
        self.rng = random.Random(config.seed)
        self.clock: Optional[ManualClock] = None
        if session is None:
            self.clock = ManualClock() if config.simulate else None
            session = BenchmarkSession("synthetic", clock=self.clock)
        elif config.simulate:
            if not isinstance(session.clock, ManualClock):
                raise ValueError(f"simulate mode needs a session driven by a ManualClock, {session.name} is not")
            self.clock = session.clock
        self.session = session
        self._pending: Dict[str, int] = {}
        self._next_id = 0

    def _spend(self, seconds: float) -> None:
        if self.clock is not None:
            self.clock.advance(seconds)
        else:
            time.sleep(seconds)

    def _duration(self, base: float) -> float:
        spread = base * self.config.jitter
        return max(0.0, self.rng.uniform(base - spread, base + spread))

    def run_frame(self, frame_index: int) -> None:
        session = self.session
        session.start_frame(frame_index)

        for phase, base in self.config.phases.items():
            with session.measure(phase):
                self._spend(self._duration(base))

        for activity_id, due in list(self._pending.items()):
            if due <= frame_index:
                session.complete_activity(activity_id)
                del self._pending[activity_id]

        if self.config.activity_categories and self.rng.random() < self.config.activity_rate:
            activity_id = f"a{self._next_id}"
            self._next_id += 1
            session.start_activity(self.rng.choice(self.config.activity_categories), activity_id)
            self._pending[activity_id] = frame_index + self.rng.randint(0, self.config.max_activity_frames)

        session.update_metric("draw_calls", 0.0, lambda v: v + self.rng.randint(10, 50))
        session.end_frame()

    def run(self) -> BenchmarkSession:
        frames = range(self.config.frames)
        for idx in tqdm(frames, desc=f"frames-{self.session.name}", disable=not self.config.progress):
            self.run_frame(idx)
        return self.session


def populate_registry(registry: SessionRegistry, config: SyntheticConfig, context_id: str = "synthetic") -> BenchmarkSession:
    """Register a session for ``context_id`` and fill it with a synthetic run."""

    clock = ManualClock() if config.simulate else None
    session = registry.register(context_id, BenchmarkSession(f"{context_id}.default", clock=clock))
    return SyntheticDriver(config, session=session).run()


__all__ = ["SyntheticConfig", "SyntheticDriver", "populate_registry"]
