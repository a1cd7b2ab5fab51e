"""Paths, storage keys and timing constants shared by every frontend."""

from __future__ import annotations

from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent  # python/heritage_puzzle/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent  # repository root
DATA_DIR = PROJECT_ROOT / "data"

STORE_FILENAME = "storage.json"
LOG_FILENAME = "puzzle.log"

# -- storage keys -------------------------------------------------------------

BEST_TIMES_KEY = "vietnam-puzzle-best-times"
COMPLETED_MILESTONES_KEY = "vietnam-puzzle-completed-milestones"
USER_KEY = "vietnam-puzzle-user"

# -- gameplay -----------------------------------------------------------------

DIFFICULTIES: tuple[int, ...] = (2, 3, 4)

# Display refresh cadence for the running clock.
TICK_SECONDS = 1.0

# How long the reference image stays visible after a preview request.
PREVIEW_SECONDS = 3.0
