"""Puzzle topics and the closed set of difficulty levels."""

from __future__ import annotations

from enum import StrEnum

from heritage_puzzle.config import DIFFICULTIES


class Topic(StrEnum):
    HISTORY = "history"
    CULTURE = "culture"


def check_difficulty(difficulty: int) -> int:
    """Return *difficulty* unchanged, or raise if it is not 2, 3 or 4."""
    if difficulty not in DIFFICULTIES:
        raise ValueError(
            f"Difficulty must be one of {DIFFICULTIES}, got {difficulty!r}."
        )
    return difficulty
