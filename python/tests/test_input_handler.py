"""Keypress decoding for the terminal frontend."""

from __future__ import annotations

from typing import Iterable

import pytest

from heritage_puzzle.frontend.cli.input_handler import _decode_escape, resolve


def _feed(chars: Iterable[str | None]):
    it = iter(chars)
    return lambda: next(it, None)


@pytest.mark.parametrize(
    ("ch", "action"),
    [
        ("w", "up"),
        ("S", "down"),
        (" ", "select"),
        ("g", "grab"),
        ("P", "preview"),
        ("r", "reshuffle"),
        ("\r", "enter"),
        ("\x03", "quit"),
        ("X", "x"),
        ("3", "3"),
        ("\x07", ""),
    ],
)
def test_resolve(ch: str, action: str) -> None:
    assert resolve(ch) == action


@pytest.mark.parametrize(
    ("rest", "action"),
    [
        (["[", "A"], "up"),
        (["[", "D"], "left"),
        (["[", "Z"], ""),
        (["["], ""),
        (["x"], "quit"),
        ([], "quit"),
    ],
    ids=["arrow-up", "arrow-left", "unknown-csi", "truncated", "alt-key", "bare-escape"],
)
def test_escape_sequences(rest: list[str], action: str) -> None:
    assert _decode_escape(_feed(rest)) == action
