"""Core gameplay logic: applies moves and detects completion."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from heritage_puzzle.backend.engine.gamegenerator import GameGenerator
from heritage_puzzle.backend.engine.gamestate import Clock, GameState
from heritage_puzzle.backend.models.campaign import PuzzleImage
from heritage_puzzle.backend.models.grid import Grid
from heritage_puzzle.backend.models.topic import Topic

logger = logging.getLogger(__name__)

# Called once per round with (elapsed_seconds, move_count).
CompletionCallback = Callable[[int, int], None]


class PuzzleGame:
    """Orchestrates a single puzzle round.

    Two move styles are supported.  Selecting a piece swaps it with the
    piece on the hole slot (the last slot); no adjacency is required.
    Dropping a piece on a slot swaps it with whatever piece is there.
    """

    def __init__(
        self,
        difficulty: int,
        topic: Topic = Topic.HISTORY,
        image: PuzzleImage | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        clock: Clock = time.time,
    ) -> None:
        self._rng = rng or random.Random()
        grid = GameGenerator.generate(difficulty, self._rng)
        self._setup(grid, topic, image, on_complete, clock)

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        topic: Topic = Topic.HISTORY,
        image: PuzzleImage | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        clock: Clock = time.time,
    ) -> "PuzzleGame":
        """Create a round from an existing arrangement (e.g. a hand-built one)."""
        obj = object.__new__(cls)
        obj._rng = rng or random.Random()
        obj._setup(grid, topic, image, on_complete, clock)
        return obj

    def _setup(
        self,
        grid: Grid,
        topic: Topic,
        image: PuzzleImage | None,
        on_complete: CompletionCallback | None,
        clock: Clock,
    ) -> None:
        self.topic = topic
        self.image = image
        self.on_complete = on_complete
        self.state = GameState(grid, clock)
        logger.debug(
            "New %s puzzle %dx%d, layout %s",
            topic, grid.difficulty, grid.difficulty, grid.layout(),
        )
        self._check_completion()

    # -- movement -------------------------------------------------------------

    def move_by_selection(self, piece_id: int) -> bool:
        """Swap *piece_id* with the piece on the hole slot.

        Returns True if the move was applied.  Selecting the piece that
        already sits on the hole is a legal, if pointless, move.
        """
        grid = self.state.grid
        if self.state.is_complete or not grid.has_piece(piece_id):
            return False

        self._apply(piece_id, grid.piece_at(grid.hole).id)
        return True

    def move_by_target(self, piece_id: int, target_slot: int) -> bool:
        """Swap *piece_id* with whichever piece occupies *target_slot*.

        Any two slots may be exchanged.  Returns True if the move was
        applied.
        """
        grid = self.state.grid
        if (
            self.state.is_complete
            or not grid.has_piece(piece_id)
            or not grid.has_slot(target_slot)
        ):
            return False

        self._apply(piece_id, grid.piece_at(target_slot).id)
        return True

    def reshuffle(self) -> None:
        """Shuffle the same pieces again and restart the round."""
        GameGenerator.shuffle(self.state.grid, self._rng)
        self.state.reset()
        logger.debug("Reshuffled, layout %s", self.state.grid.layout())
        self._check_completion()

    # -- queries --------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def difficulty(self) -> int:
        return self.state.grid.difficulty

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_seconds

    @property
    def move_count(self) -> int:
        return self.state.moves

    # -- helpers --------------------------------------------------------------

    def _apply(self, a: int, b: int) -> None:
        self.state.grid.swap(a, b)
        self.state.increment_moves()
        self._check_completion()

    def _check_completion(self) -> None:
        if not self.state.grid.is_solved():
            return
        if not self.state.mark_complete():
            return
        elapsed, moves = self.state.elapsed_seconds, self.state.moves
        logger.info("Puzzle complete in %ss with %d moves", elapsed, moves)
        if self.on_complete is not None:
            self.on_complete(elapsed, moves)
