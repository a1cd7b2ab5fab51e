"""Shared fixtures: in-memory store, seeded randomness, and a manual clock."""

from __future__ import annotations

import random
from typing import Callable

import pytest

from heritage_puzzle.backend.engine.gameplay import PuzzleGame
from heritage_puzzle.backend.storage import MemoryStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedRandom(random.Random):
    """Random whose shuffles are predictable.

    With *keep_solved* set every Fisher-Yates pick is the current index, so
    a shuffle leaves the grid solved; otherwise every pick is 0, which
    rotates the positions and never leaves it solved.
    """

    def __init__(self, keep_solved: bool = True) -> None:
        super().__init__(0)
        self.keep_solved = keep_solved

    def randint(self, a: int, b: int) -> int:
        return b if self.keep_solved else a


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def solve() -> Callable[[PuzzleGame], int]:
    """Return a helper that drags every piece home; it returns the moves used."""

    def _solve(game: PuzzleGame) -> int:
        used = 0
        for piece_id in range(game.grid.size):
            if game.is_complete:
                break
            if game.grid.piece(piece_id).current_position != piece_id:
                assert game.move_by_target(piece_id, piece_id)
                used += 1
        assert game.is_complete
        return used

    return _solve
