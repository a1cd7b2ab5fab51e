#!/usr/bin/env python3
"""Vietnam Puzzle Heritage.

Usage::

    heritage-puzzle                  # interactive menu
    heritage-puzzle -f rich          # Rich terminal
    heritage-puzzle -f pyqt          # PyQt6 GUI
    heritage-puzzle --best-times     # print best times and exit
"""

from __future__ import annotations

import importlib
import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

from heritage_puzzle.backend.data import HISTORICAL_CAMPAIGNS
from heritage_puzzle.backend.models import BestTimes, Topic, milestone_key, topic_key
from heritage_puzzle.backend.storage import JsonFileStore
from heritage_puzzle.config import DATA_DIR, DIFFICULTIES, STORE_FILENAME
from heritage_puzzle.logger_config import configure_logging

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.rich: "heritage_puzzle.frontend.cli.rich.app",
    Frontend.pyqt: "heritage_puzzle.frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def _fmt(seconds: int | None) -> str:
    if seconds is None:
        return "--:--"
    m, s = divmod(seconds, 60)
    return f"{m}:{s:02d}"


def _print_best_times(data_dir: Path) -> None:
    best = BestTimes(JsonFileStore(data_dir / STORE_FILENAME))

    print("\n  === BEST TIMES ===")
    header = "".join(f"{d}x{d}".rjust(8) for d in DIFFICULTIES)
    print(f"\n  {'':<28}{header}")
    for topic in Topic:
        row = "".join(_fmt(best.get(topic_key(topic, d))).rjust(8) for d in DIFFICULTIES)
        print(f"  {topic.value.title():<28}{row}")
    for campaign in HISTORICAL_CAMPAIGNS:
        for milestone in campaign.milestones:
            times = [best.get(milestone_key(milestone.id, d)) for d in DIFFICULTIES]
            if all(t is None for t in times):
                continue
            row = "".join(_fmt(t).rjust(8) for t in times)
            print(f"  {milestone.title[:27]:<28}{row}")
    print()


def _launch(frontend: Frontend, data_dir: Path) -> None:
    try:
        mod = importlib.import_module(_RUNNERS[frontend])
    except ImportError as exc:
        # PyQt6 ships as the optional "gui" extra
        logger.error("Cannot load %s frontend: %s", frontend, exc)
        print(f"  The {frontend} frontend is unavailable ({exc}).")
        print('  Install it with:  pip install "vietnam-puzzle-heritage[gui]"')
        raise typer.Exit(code=1) from exc
    mod.run(data_dir=data_dir)


def _menu_loop(data_dir: Path) -> None:
    while True:
        print()
        print("  ==========================================")
        print("       VIETNAM  PUZZLE  HERITAGE            ")
        print("  ==========================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (PyQt GUI)")
        print("  3.  View Best Times")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice == "1":
            _launch(Frontend.rich, data_dir)
        elif choice == "2":
            _launch(Frontend.pyqt, data_dir)
        elif choice == "3":
            _print_best_times(data_dir)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        file_okay=False,
        help="Directory holding saved progress and logs.",
    ),
    best_times: bool = typer.Option(
        False, "--best-times",
        help="Show best times and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug detail (shuffles, moves) to the log file.",
    ),
) -> None:
    """Vietnam Puzzle Heritage."""
    configure_logging(data_dir, "DEBUG" if verbose else "INFO")

    if best_times:
        _print_best_times(data_dir)
        return

    if frontend is None:
        _menu_loop(data_dir)
        return

    _launch(frontend, data_dir)


if __name__ == "__main__":
    app()
