# timing.py
"""
The two cadences of the main loop:

- StepGate: logical simulation steps, at most one per call, only once
  `interval` seconds have passed since the last step.
- FrameLimiter: render frames, capped by a minimum frame interval.

Both take the clock (and sleep) as callables so tests can drive time by hand.
"""
from __future__ import annotations
import time
from typing import Callable, Optional

from .config import FRAME_DELAY

Clock = Callable[[], float]


class StepGate:
    def __init__(self, interval: float, now: float = 0.0) -> None:
        self.interval = interval
        self.last = now

    def reset(self, now: float) -> None:
        self.last = now

    def poll(self, now: float) -> Optional[float]:
        """Return the elapsed time and restart the gate if a step is due, else None."""
        elapsed = now - self.last
        if elapsed < self.interval:
            return None
        self.last = now
        return elapsed


class FrameLimiter:
    def __init__(
        self,
        min_interval: float = FRAME_DELAY,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep

    def wait(self, started: float) -> float:
        """Sleep out the rest of the frame that began at `started`; return the time slept."""
        remaining = self.min_interval - (self.clock() - started)
        if remaining > 0:
            self.sleep(remaining)
            return remaining
        return 0.0
