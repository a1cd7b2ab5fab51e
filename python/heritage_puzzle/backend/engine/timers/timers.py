"""Polled timers for the clock display and the preview window.

Everything runs on the UI thread: the frontend's event loop calls
``poll()`` / ``visible`` and nothing fires in the background.  A timer
that has been cancelled stays silent until it is started again.
"""

from __future__ import annotations

import time

from heritage_puzzle.backend.engine.gamestate import Clock
from heritage_puzzle.config import PREVIEW_SECONDS, TICK_SECONDS


class IntervalTimer:
    """Fires at most once per *interval* while active."""

    def __init__(self, interval: float = TICK_SECONDS, clock: Clock = time.monotonic) -> None:
        self.interval = interval
        self._clock = clock
        self._next: float | None = None

    @property
    def active(self) -> bool:
        return self._next is not None

    def start(self) -> None:
        self._next = self._clock() + self.interval

    def cancel(self) -> None:
        self._next = None

    def poll(self) -> bool:
        """Return True if an interval boundary passed since the last poll."""
        if self._next is None:
            return False
        now = self._clock()
        if now < self._next:
            return False
        # missed ticks collapse into one
        while self._next <= now:
            self._next += self.interval
        return True


class PreviewTimer:
    """A fixed-length visibility window that restarts on every request."""

    def __init__(self, duration: float = PREVIEW_SECONDS, clock: Clock = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._deadline: float | None = None

    def show(self) -> None:
        self._deadline = self._clock() + self.duration

    def cancel(self) -> None:
        self._deadline = None

    @property
    def visible(self) -> bool:
        if self._deadline is None:
            return False
        if self._clock() >= self._deadline:
            self._deadline = None
            return False
        return True
