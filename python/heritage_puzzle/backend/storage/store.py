"""Flat key-value persistence with JSON-encoded values."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String keys mapped to string values, like browser local storage."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None: ...


class MemoryStore(KeyValueStore):
    """Ephemeral store, used by tests and guest sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Keeps every key in one JSON object on disk, rewritten on each change."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._data: dict[str, str] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.filepath, exc)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top level is not an object", self.filepath)
            return
        self._data = {k: v for k, v in data.items() if isinstance(v, str)}

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(
            json.dumps(self._data, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    # -- access ---------------------------------------------------------------

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.save()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self.save()


# -- JSON helpers --------------------------------------------------------------


def load_json(store: KeyValueStore, key: str, default: Any, expected: type) -> Any:
    """Decode the value under *key*, falling back to *default*.

    A missing key, a value that is not valid JSON, or one that does not
    decode to *expected* all count as absent.
    """
    raw = store.get(key)
    if raw is None:
        return default
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Stored value for %r is not valid JSON; using default", key)
        return default
    if not isinstance(value, expected):
        logger.warning(
            "Stored value for %r is %s, expected %s; using default",
            key,
            type(value).__name__,
            expected.__name__,
        )
        return default
    return value


def save_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value, ensure_ascii=False))
