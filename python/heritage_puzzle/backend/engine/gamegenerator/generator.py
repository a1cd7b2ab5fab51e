"""Generates shuffled puzzle grids."""

from __future__ import annotations

import random

from heritage_puzzle.backend.models.grid import Grid


class GameGenerator:
    """Creates puzzles by shuffling piece positions from the solved state."""

    @staticmethod
    def solved(difficulty: int) -> Grid:
        """Return the goal-state grid (every piece on its own slot)."""
        return Grid.solved(difficulty)

    @staticmethod
    def shuffle(grid: Grid, rng: random.Random | None = None) -> None:
        """Shuffle *grid* in-place with Fisher–Yates.

        Only the ``current_position`` values move between pieces; ids,
        correct positions and image offsets stay on their piece.  The
        result may happen to be solved; callers accept that.
        """
        rng = rng or random
        pieces = grid.pieces
        for i in range(len(pieces) - 1, 0, -1):
            j = rng.randint(0, i)
            pieces[i].current_position, pieces[j].current_position = (
                pieces[j].current_position,
                pieces[i].current_position,
            )

    @staticmethod
    def generate(difficulty: int, rng: random.Random | None = None) -> Grid:
        """Return a freshly shuffled grid of the given difficulty."""
        grid = GameGenerator.solved(difficulty)
        GameGenerator.shuffle(grid, rng)
        return grid
