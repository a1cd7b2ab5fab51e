"""Key-value stores and the JSON helpers on top of them."""

from __future__ import annotations

import json
from pathlib import Path

from heritage_puzzle.backend.storage import JsonFileStore, MemoryStore, load_json, save_json


def test_file_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"
    store = JsonFileStore(path)

    store.set("greeting", "xin chào")

    assert path.exists()
    assert JsonFileStore(path).get("greeting") == "xin chào"


def test_file_store_remove(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    store = JsonFileStore(path)
    store.set("a", "1")
    store.set("b", "2")

    store.remove("a")
    store.remove("missing")

    assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}


def test_corrupt_file_loads_empty_and_recovers(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{{{ definitely not json", encoding="utf-8")

    store = JsonFileStore(path)
    assert store.get("anything") is None

    store.set("k", "v")
    assert JsonFileStore(path).get("k") == "v"


def test_non_object_file_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert JsonFileStore(path).get("0") is None


def test_load_json_round_trip() -> None:
    store = MemoryStore()
    save_json(store, "times", {"history-2": 40})

    assert load_json(store, "times", {}, dict) == {"history-2": 40}


def test_load_json_falls_back_on_bad_values() -> None:
    store = MemoryStore({"broken": "{", "wrong": "[1]"})

    assert load_json(store, "broken", {}, dict) == {}
    assert load_json(store, "wrong", {}, dict) == {}
    assert load_json(store, "absent", [], list) == []
