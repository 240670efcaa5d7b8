"""SQL-backed key-value store."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.orm import Session, sessionmaker

from backend.portal.db.models import KvEntry


class SqlKeyValueStore:
    """KeyValueStore persisted as rows of the kv_entry table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize store.

        Args:
            session_factory: Sessionmaker bound to an engine whose schema exists
        """
        self._session_factory = session_factory

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """Read the whole list stored under key."""
        with self._session_factory() as session:
            entry = session.get(KvEntry, key)
            if entry is None:
                return None
            return list(entry.value)

    def set(self, key: str, value: list[dict[str, Any]]) -> None:
        """Replace the whole list stored under key in one transaction."""
        with self._session_factory() as session:
            entry = session.get(KvEntry, key)
            if entry is None:
                session.add(KvEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def ping(self) -> bool:
        """Run a trivial query against the database."""
        with self._session_factory() as session:
            session.execute(text("SELECT 1"))
        return True
