"""Best-time law: a stored time only ever goes down."""

from __future__ import annotations

import json

from heritage_puzzle.backend.models import BestTimes, milestone_key, topic_key
from heritage_puzzle.backend.models.topic import Topic
from heritage_puzzle.backend.storage import MemoryStore
from heritage_puzzle.config import BEST_TIMES_KEY


def _stored(store: MemoryStore) -> dict:
    raw = store.get(BEST_TIMES_KEY)
    assert raw is not None
    return json.loads(raw)


def test_keys() -> None:
    assert topic_key(Topic.HISTORY, 2) == "history-2"
    assert topic_key("culture", 4) == "culture-4"
    assert milestone_key("bach-dang-2", 3) == "milestone-bach-dang-2-3"


def test_improvement_replaces_and_regression_is_ignored() -> None:
    store = MemoryStore({BEST_TIMES_KEY: json.dumps({"history-2": 45})})
    best = BestTimes(store)

    assert best.record("history-2", 40)
    assert _stored(store) == {"history-2": 40}

    assert not best.record("history-2", 50)
    assert _stored(store) == {"history-2": 40}
    assert best.get("history-2") == 40


def test_equal_time_is_not_an_improvement(store: MemoryStore) -> None:
    best = BestTimes(store)
    best.record("culture-3", 30)

    assert not best.record("culture-3", 30)


def test_absent_key_is_always_recorded(store: MemoryStore) -> None:
    best = BestTimes(store)

    assert best.get("culture-4") is None
    assert best.record("culture-4", 300)
    assert best.all() == {"culture-4": 300}


def test_values_survive_reload(store: MemoryStore) -> None:
    BestTimes(store).record("milestone-lam-son-1-2", 77)

    assert BestTimes(store).get("milestone-lam-son-1-2") == 77


def test_malformed_store_reads_as_empty() -> None:
    store = MemoryStore({BEST_TIMES_KEY: "{not json"})

    assert BestTimes(store).all() == {}


def test_malformed_entries_are_dropped() -> None:
    store = MemoryStore(
        {BEST_TIMES_KEY: json.dumps({"history-2": "fast", "history-3": 12, "culture-2": True})}
    )

    assert BestTimes(store).all() == {"history-3": 12}


def test_stored_zero_counts_as_no_time() -> None:
    store = MemoryStore({BEST_TIMES_KEY: json.dumps({"history-2": 0})})
    best = BestTimes(store)

    assert best.get("history-2") is None
    assert best.record("history-2", 9)
    assert _stored(store) == {"history-2": 9}
