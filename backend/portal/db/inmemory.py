"""In-memory implementation of the key-value store."""

import json
from typing import Any


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore.

    Values are kept serialized so callers never share mutable state with the
    store, the same as with a persistent backend.
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """Read the whole list stored under key."""
        raw = self._values.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: list[dict[str, Any]]) -> None:
        """Replace the whole list stored under key."""
        self._values[key] = json.dumps(value)

    def ping(self) -> bool:
        """Always reachable."""
        return True
