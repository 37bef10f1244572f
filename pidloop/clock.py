"""Millisecond clocks consumed by the controller."""
from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def monotonic_millis() -> int:
    return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to. Used by tests and the simulator."""

    def __init__(self, start_ms: int = 0) -> None:
        self.now_ms = int(start_ms)

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> int:
        self.now_ms += int(ms)
        return self.now_ms

    def set(self, ms: int) -> None:
        self.now_ms = int(ms)
