"""Grid model: construction, lookups, and the completion predicate."""

from __future__ import annotations

import pytest

from heritage_puzzle.backend.models.grid import Grid


# -- construction -------------------------------------------------------------


@pytest.mark.parametrize("difficulty", [2, 3, 4])
def test_solved_grid_has_identity_layout(difficulty: int) -> None:
    grid = Grid.solved(difficulty)

    assert grid.size == difficulty * difficulty
    assert [p.id for p in grid.pieces] == list(range(grid.size))
    assert grid.positions() == list(range(grid.size))
    assert all(p.correct_position == p.id for p in grid.pieces)
    assert grid.is_solved()


def test_background_offsets_are_percentages() -> None:
    grid = Grid.solved(4)

    assert (grid.piece(0).x, grid.piece(0).y) == (0, 0)
    assert (grid.piece(3).x, grid.piece(3).y) == (75, 0)
    assert (grid.piece(6).x, grid.piece(6).y) == (50, 25)
    assert (grid.piece(15).x, grid.piece(15).y) == (75, 75)


def test_three_by_three_offsets_use_thirds() -> None:
    grid = Grid.solved(3)

    assert grid.piece(4).x == pytest.approx(100 / 3)
    assert grid.piece(8).y == pytest.approx(200 / 3)


@pytest.mark.parametrize("difficulty", [0, 1, 5, -2])
def test_unsupported_difficulty_is_rejected(difficulty: int) -> None:
    with pytest.raises(ValueError):
        Grid.solved(difficulty)


@pytest.mark.parametrize(
    "positions",
    [[0, 1, 2], [0, 0, 1, 2], [0, 1, 2, 4], [3, 2, 1, 0, 4]],
    ids=["short", "duplicate", "out-of-range", "long"],
)
def test_from_positions_requires_a_permutation(positions: list[int]) -> None:
    with pytest.raises(ValueError):
        Grid.from_positions(2, positions)


# -- queries ------------------------------------------------------------------


def test_hole_is_last_slot() -> None:
    assert Grid.solved(2).hole == 3
    assert Grid.solved(3).hole == 8
    assert Grid.solved(4).hole == 15


def test_piece_at_and_layout() -> None:
    grid = Grid.from_positions(2, [2, 0, 3, 1])

    assert grid.piece_at(0).id == 1
    assert grid.piece_at(3).id == 2
    assert grid.layout() == [1, 3, 0, 2]
    assert not grid.is_solved()
    assert not grid.is_piece_correct(0)


def test_swapping_out_of_solved_breaks_completion() -> None:
    grid = Grid.from_positions(2, [0, 1, 2, 3])
    assert grid.is_solved()

    grid.swap(grid.piece_at(0).id, grid.piece_at(1).id)

    assert not grid.is_solved()
    assert grid.positions() == [1, 0, 2, 3]


def test_copy_is_independent() -> None:
    grid = Grid.from_positions(2, [1, 0, 2, 3])
    clone = grid.copy()

    clone.swap(0, 1)

    assert clone.is_solved()
    assert grid.positions() == [1, 0, 2, 3]
