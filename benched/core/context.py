"""Execution-context identifiers used to pick the current session."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator, Optional

ContextResolver = Callable[[], Optional[str]]

_task_context: ContextVar[Optional[str]] = ContextVar("benched_context", default=None)


def thread_context_id() -> Optional[str]:
    """Name of the calling thread."""

    return threading.current_thread().name


def task_context_id() -> Optional[str]:
    """Id bound with :func:`bind_context`, or ``None`` outside a binding."""

    return _task_context.get()


@contextmanager
def bind_context(context_id: str) -> Iterator[str]:
    """Bind ``context_id`` for the current thread or asyncio task."""

    token = _task_context.set(context_id)
    try:
        yield context_id
    finally:
        _task_context.reset(token)


__all__ = ["ContextResolver", "thread_context_id", "task_context_id", "bind_context"]
