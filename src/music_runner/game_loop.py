"""
game_loop.py: Fixed-rate tick scheduling.
"""

import threading
import time
from typing import Callable

from .constants import TICK_TIME, MAX_CATCH_UP_TICKS


class TickScheduler:
    """
    Turns wall-clock time into whole fixed-size ticks.
    Ticks never overlap: each step returns before the next is started.
    """

    def __init__(self, tick_time: float = TICK_TIME, max_catch_up: int = MAX_CATCH_UP_TICKS):
        self.tick_time = tick_time
        self.max_catch_up = max_catch_up
        self.accumulator = 0.0
        self.ticks = 0

    def advance(self, elapsed: float) -> int:
        """Adds elapsed seconds and returns how many ticks are due now."""
        self.accumulator += max(elapsed, 0.0)
        due = int(self.accumulator // self.tick_time)
        if due > self.max_catch_up:
            # Drop the backlog instead of trying to simulate it all at once
            due = self.max_catch_up
            self.accumulator = 0.0
        else:
            self.accumulator -= due * self.tick_time
        self.ticks += due
        return due

    def reset(self):
        self.accumulator = 0.0

    def run(self, step: Callable[[], None], running: threading.Event):
        """Calls step() once per tick until running is cleared."""
        while running.is_set():
            start_time = time.monotonic()

            step()
            self.ticks += 1

            # Time remaining until next tick
            elapsed_time = time.monotonic() - start_time
            sleep_time = self.tick_time - elapsed_time
            if sleep_time > 0:
                time.sleep(sleep_time)
