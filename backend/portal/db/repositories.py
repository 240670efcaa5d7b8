"""Repository protocol interfaces for data access."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Single logical key-value store.

    Every collection is an ordered list of JSON-compatible dicts kept under a
    well-known key. Access is read-whole / write-whole; no partial reads.
    """

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """Read the whole list stored under key.

        Args:
            key: Logical collection key

        Returns:
            Stored list or None if the key was never written
        """
        ...

    def set(self, key: str, value: list[dict[str, Any]]) -> None:
        """Replace the whole list stored under key.

        Args:
            key: Logical collection key
            value: Full list to persist
        """
        ...

    def ping(self) -> bool:
        """Check backend connectivity.

        Returns:
            True if the backend answered
        """
        ...
