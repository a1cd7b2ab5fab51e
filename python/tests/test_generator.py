"""Generator tests: every shuffle must be a permutation of the slots."""

from __future__ import annotations

import random

import pytest

from heritage_puzzle.backend.engine.gamegenerator import GameGenerator


@pytest.mark.parametrize("difficulty", [2, 3, 4])
@pytest.mark.parametrize("seed", range(25))
def test_generate_yields_permutation(difficulty: int, seed: int) -> None:
    grid = GameGenerator.generate(difficulty, random.Random(seed))
    n = difficulty * difficulty

    assert len(grid.pieces) == n
    assert sorted(grid.positions()) == list(range(n))


@pytest.mark.parametrize("difficulty", [2, 3, 4])
def test_shuffle_moves_only_positions(difficulty: int) -> None:
    reference = GameGenerator.solved(difficulty)
    grid = GameGenerator.generate(difficulty, random.Random(7))

    for before, after in zip(reference.pieces, grid.pieces):
        assert after.id == before.id
        assert after.correct_position == before.correct_position
        assert (after.x, after.y) == (before.x, before.y)


def test_same_seed_same_layout() -> None:
    a = GameGenerator.generate(4, random.Random(99))
    b = GameGenerator.generate(4, random.Random(99))

    assert a.positions() == b.positions()


def test_large_grids_are_almost_never_solved() -> None:
    rng = random.Random(2024)
    solved = sum(GameGenerator.generate(4, rng).is_solved() for _ in range(200))

    assert solved == 0


def test_two_by_two_reaches_every_arrangement() -> None:
    rng = random.Random(5)
    seen = {tuple(GameGenerator.generate(2, rng).positions()) for _ in range(2000)}

    # 4! layouts, the solved one included
    assert len(seen) == 24
