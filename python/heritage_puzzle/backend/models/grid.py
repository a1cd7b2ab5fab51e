"""Grid model for the picture puzzle."""

from __future__ import annotations

from dataclasses import dataclass

from heritage_puzzle.backend.models.topic import check_difficulty


@dataclass
class Piece:
    """One cut of the picture.

    ``x`` and ``y`` are background offsets in percent, derived from the
    correct position, so the piece always shows the same region of the
    image whatever the rendered size.
    """

    id: int
    correct_position: int
    current_position: int
    x: float
    y: float

    @property
    def is_correct(self) -> bool:
        return self.current_position == self.correct_position


@dataclass
class Grid:
    """A ``difficulty × difficulty`` arrangement of pieces.

    ``pieces[i]`` is the piece with id ``i``.  The ``current_position``
    values always form a permutation of ``0..N-1``.
    """

    difficulty: int
    pieces: list[Piece]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, difficulty: int) -> Grid:
        """Return a grid with every piece on its correct slot."""
        check_difficulty(difficulty)
        step = 100 / difficulty
        pieces = [
            Piece(
                id=i,
                correct_position=i,
                current_position=i,
                x=(i % difficulty) * step,
                y=(i // difficulty) * step,
            )
            for i in range(difficulty * difficulty)
        ]
        return cls(difficulty=difficulty, pieces=pieces)

    @classmethod
    def from_positions(cls, difficulty: int, positions: list[int]) -> Grid:
        """Create a grid where piece ``i`` sits on slot ``positions[i]``.

        Example::

            Grid.from_positions(2, [1, 0, 2, 3])
        """
        size = difficulty * difficulty
        if sorted(positions) != list(range(size)):
            raise ValueError(
                f"Expected a permutation of 0..{size - 1} for a "
                f"{difficulty}×{difficulty} grid, got {positions}."
            )
        grid = cls.solved(difficulty)
        for piece, slot in zip(grid.pieces, positions):
            piece.current_position = slot
        return grid

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of slots (and pieces)."""
        return self.difficulty * self.difficulty

    @property
    def hole(self) -> int:
        """The slot that click-to-move swaps into: always the last one."""
        return self.size - 1

    def has_piece(self, piece_id: int) -> bool:
        return 0 <= piece_id < self.size

    def has_slot(self, slot: int) -> bool:
        return 0 <= slot < self.size

    def piece(self, piece_id: int) -> Piece:
        return self.pieces[piece_id]

    def piece_at(self, slot: int) -> Piece:
        """Return the piece currently occupying *slot*."""
        for piece in self.pieces:
            if piece.current_position == slot:
                return piece
        raise LookupError(f"No piece on slot {slot}.")

    def positions(self) -> list[int]:
        """Current slot of every piece, indexed by piece id."""
        return [p.current_position for p in self.pieces]

    def layout(self) -> list[int]:
        """Piece id on every slot, indexed by slot (row-major)."""
        by_slot = [0] * self.size
        for piece in self.pieces:
            by_slot[piece.current_position] = piece.id
        return by_slot

    def is_solved(self) -> bool:
        """Check if all pieces are on their correct slots."""
        return all(p.is_correct for p in self.pieces)

    def is_piece_correct(self, piece_id: int) -> bool:
        return self.pieces[piece_id].is_correct

    # -- mutation -------------------------------------------------------------

    def swap(self, a: int, b: int) -> None:
        """Exchange the current slots of pieces *a* and *b*."""
        pa, pb = self.pieces[a], self.pieces[b]
        pa.current_position, pb.current_position = (
            pb.current_position,
            pa.current_position,
        )

    def copy(self) -> Grid:
        return Grid(
            difficulty=self.difficulty,
            pieces=[
                Piece(p.id, p.correct_position, p.current_position, p.x, p.y)
                for p in self.pieces
            ],
        )
