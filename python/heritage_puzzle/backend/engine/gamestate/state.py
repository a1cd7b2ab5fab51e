"""Tracks the mutable state of a puzzle in progress."""

from __future__ import annotations

import math
import time
from typing import Callable

from heritage_puzzle.backend.models.grid import Grid

Clock = Callable[[], float]


class GameState:
    """Holds the grid, move counter, start time and completion latch."""

    def __init__(self, grid: Grid, clock: Clock = time.time) -> None:
        self.grid = grid
        self._clock = clock
        self.moves: int = 0
        self._start_time: float = clock()
        self._completed: bool = False
        self._completion_seconds: int | None = None

    def reset(self) -> None:
        """Zero the counter, clear the latch and restart the clock."""
        self.moves = 0
        self._start_time = self._clock()
        self._completed = False
        self._completion_seconds = None

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since start, frozen once the puzzle is complete."""
        if self._completion_seconds is not None:
            return self._completion_seconds
        return self._seconds_since_start()

    def _seconds_since_start(self) -> int:
        return max(0, math.floor(self._clock() - self._start_time))

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    # -- completion -----------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        return self._completed

    def mark_complete(self) -> bool:
        """Latch completion and freeze the time.

        Returns True only on the false→true transition.
        """
        if self._completed:
            return False
        self._completed = True
        self._completion_seconds = self._seconds_since_start()
        return True
