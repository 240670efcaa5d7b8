"""Integration tests for the SQL key-value backend (sqlite in-memory)."""

import uuid
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from backend.portal.config import Settings
from backend.portal.container import build_portal
from backend.portal.db.engine import create_kv_store, create_session_factory
from backend.portal.db.models import Base
from backend.portal.db.sql_store import SqlKeyValueStore


@pytest.fixture
def sql_store() -> SqlKeyValueStore:
    """SQL store over a shared in-memory sqlite connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return SqlKeyValueStore(create_session_factory(engine))


def test_get_missing_key_returns_none(sql_store: SqlKeyValueStore) -> None:
    """Test that unknown keys read as None."""
    assert sql_store.get("caseIndex") is None


def test_set_then_get_and_overwrite(sql_store: SqlKeyValueStore) -> None:
    """Test insert followed by whole-list replacement."""
    sql_store.set("auditLogs", [{"n": 1}])
    sql_store.set("auditLogs", [{"n": 1}, {"n": 2}])

    assert sql_store.get("auditLogs") == [{"n": 1}, {"n": 2}]


def test_ping(sql_store: SqlKeyValueStore) -> None:
    """Test connectivity check."""
    assert sql_store.ping() is True


def test_portal_over_sql_store(sql_store: SqlKeyValueStore) -> None:
    """Test upload and search end to end on the SQL backend."""
    portal = build_portal(Settings(_env_file=None), sql_store)  # type: ignore[call-arg]
    officer = portal.sessions.context_for("LAW002", "127.0.0.1")

    doc = portal.upload(officer, title="Persisted", text="The appeal was dismissed.")
    results = portal.search_engine.search("APPEAL", officer)

    assert [r.chunk.document_id for r in results] == [doc.id]
    assert isinstance(results[0].chunk.id, uuid.UUID)
    assert sql_store.get("caseIndex") is not None


def test_create_kv_store_sql_backend(tmp_path: Path) -> None:
    """Test backend selection creates the table in a sqlite file."""
    settings = Settings(
        storage_backend="sql",
        database_url=f"sqlite:///{tmp_path / 'portal.db'}",
        _env_file=None,  # type: ignore[call-arg]
    )

    store = create_kv_store(settings)
    store.set("cases", [])

    assert isinstance(store, SqlKeyValueStore)
    assert store.get("cases") == []
