from heritage_puzzle.backend.storage.store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    load_json,
    save_json,
)

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "load_json", "save_json"]
