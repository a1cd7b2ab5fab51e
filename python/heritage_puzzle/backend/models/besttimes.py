"""Best completion time per topic or milestone and difficulty."""

from __future__ import annotations

import logging

from heritage_puzzle.backend.storage import KeyValueStore, load_json, save_json
from heritage_puzzle.config import BEST_TIMES_KEY

logger = logging.getLogger(__name__)


def topic_key(topic: str, difficulty: int) -> str:
    return f"{topic}-{difficulty}"


def milestone_key(milestone_id: str, difficulty: int) -> str:
    return f"milestone-{milestone_id}-{difficulty}"


class BestTimes:
    """Loads, updates, and queries best times kept in a key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._times: dict[str, int] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        data = load_json(self.store, BEST_TIMES_KEY, {}, dict)
        for key, seconds in data.items():
            # bool is an int subclass; a stored true/false is not a time
            if isinstance(seconds, int) and not isinstance(seconds, bool):
                self._times[key] = seconds
            else:
                logger.warning("Dropping malformed best time %r=%r", key, seconds)

    def save(self) -> None:
        save_json(self.store, BEST_TIMES_KEY, self._times)

    # -- queries --------------------------------------------------------------

    def get(self, key: str) -> int | None:
        """Best time for *key*; a stored 0 counts as no time at all."""
        return self._times.get(key) or None

    def all(self) -> dict[str, int]:
        return dict(self._times)

    def record(self, key: str, seconds: int) -> bool:
        """Store *seconds* under *key* if it beats the current best.

        Returns True when the stored value changed.
        """
        current = self.get(key)
        if current is not None and seconds >= current:
            return False
        self._times[key] = seconds
        self.save()
        logger.info("New best time for %s: %ss (was %s)", key, seconds, current)
        return True
