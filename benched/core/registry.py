"""Lookup of sessions by execution context."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..utils.logging import logger
from ..utils.timers import Clock
from .context import ContextResolver, thread_context_id
from .session import BenchmarkSession


class SessionRegistry:
    """Context id -> session table owned by the application.

    The table itself is lock-protected; the sessions it hands out are not and
    should only be driven from the context they were registered for.
    """

    def __init__(self, resolver: ContextResolver = thread_context_id, clock: Optional[Clock] = None):
        self.resolver = resolver
        self.clock = clock
        self._sessions: Dict[str, BenchmarkSession] = {}
        self._lock = threading.Lock()

    def register(self, context_id: str, session: Optional[BenchmarkSession] = None) -> BenchmarkSession:
        if session is None:
            session = BenchmarkSession(name=f"{context_id}.default", clock=self.clock)
        with self._lock:
            replaced = context_id in self._sessions
            self._sessions[context_id] = session
        if replaced:
            logger.debug("replaced session registered for {ctx}", ctx=context_id)
        return session

    def register_current(self) -> Optional[BenchmarkSession]:
        context_id = self.resolver()
        if context_id is None:
            logger.error("cannot register a session: no current execution context")
            return None
        return self.register(context_id)

    def unregister(self, context_id: str) -> Optional[BenchmarkSession]:
        with self._lock:
            return self._sessions.pop(context_id, None)

    def get(self, context_id: str) -> Optional[BenchmarkSession]:
        with self._lock:
            return self._sessions.get(context_id)

    def current(self) -> Optional[BenchmarkSession]:
        context_id = self.resolver()
        if context_id is None:
            return None
        return self.get(context_id)

    def find(self, name: str) -> Optional[BenchmarkSession]:
        """Look a session up by its own name rather than its context id."""
        with self._lock:
            for session in self._sessions.values():
                if session.name == name:
                    return session
        return None

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._sessions)

    def sessions(self) -> Dict[str, BenchmarkSession]:
        with self._lock:
            return dict(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SessionRegistry"]
