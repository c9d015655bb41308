from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest
from loguru import logger

sys.path.append(str(Path(__file__).resolve().parents[1]))

from benched.core.session import BenchmarkSession
from benched.utils.timers import ManualClock


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def session(clock: ManualClock) -> BenchmarkSession:
    return BenchmarkSession("test", clock=clock)


@pytest.fixture
def errors() -> List[str]:
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="ERROR")
    yield messages
    logger.remove(handler_id)
