"""Single-keypress reader for the terminal frontend.

Handles arrow keys, WASD, and the puzzle's action keys without requiring
Enter.  Raw tty mode on macOS / Linux, msvcrt on Windows.
"""

from __future__ import annotations

import os
import sys
import time
from contextlib import contextmanager
from typing import Callable, Iterator


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    " ": "select",
    "g": "grab",
    "G": "grab",
    "p": "preview",
    "P": "preview",
    "r": "reshuffle",
    "R": "reshuffle",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# Second byte of a Windows extended-key code
_SCAN_MAP: dict[str, str] = {
    "H": "up",
    "P": "down",
    "K": "left",
    "M": "right",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch.lower() if ch.isprintable() else "")


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ESC sequence; *read_next* returns None when nothing follows."""
    ch2 = read_next()
    if ch2 is None:
        return "quit"  # bare Escape
    if ch2 != "[":
        return "quit"
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- low-level terminal access -----------------------------------------------


@contextmanager
def _raw_terminal() -> Iterator[int]:
    """Put stdin in raw mode for the duration of the block; yields its fd."""
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _reader(fd: int) -> Callable[[float | None], str | None]:
    """Unbuffered one-byte reader; ``select`` must see the rest of a sequence."""
    import select

    def read(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    return read


def _windows_key(wait: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if wait is not None:
        end = time.monotonic() + wait
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    ch = msvcrt.getch().decode("utf-8", errors="ignore")
    # msvcrt reports arrows as a two-byte scan code
    if ch in ("\x00", "\xe0"):
        return _SCAN_MAP.get(msvcrt.getch().decode("utf-8", errors="ignore"), "")
    if ch == "\x1b":
        return "quit"
    return resolve(ch)


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "up", "down", "left", "right"  cursor movement
        "select"                       space (swap with the hole)
        "grab"                         g (pick up / drop a piece)
        "preview"                      p (show the picture)
        "reshuffle"                    r
        "quit"                         q / Ctrl-C / Escape
        "enter"                        Enter / Return
        "<char>"                       any other printable char, lowercased
        ""                             unrecognised key
    """
    key = None
    while key is None:
        key = get_key_timeout(None)
    return key


def get_key_timeout(timeout: float | None) -> str | None:
    """Like ``get_key`` but gives up after *timeout* seconds.

    Returns ``None`` when nothing was pressed in time.  A *timeout* of
    ``None`` waits forever.
    """
    if os.name == "nt":
        return _windows_key(timeout)

    with _raw_terminal() as fd:
        read = _reader(fd)
        ch = read(timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: read(0.1))
        return resolve(ch)
