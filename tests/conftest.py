"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from backend.portal.config import Settings
from backend.portal.container import Portal, build_portal
from backend.portal.db.context import RequestContext
from backend.portal.db.inmemory import InMemoryKeyValueStore
from backend.portal.main import create_app
from backend.portal.models.docs import ContentChunk, Document

# Roster codes by role
ADMIN_CODE = "LAW001"
OFFICER_CODE = "LAW002"
STAFF_CODE = "LAW004"
VIEWER_CODE = "LAW005"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env file."""
    return Settings(storage_backend="memory", _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    """Fresh in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def portal(settings: Settings, kv: InMemoryKeyValueStore) -> Portal:
    """Portal wired over an isolated store."""
    return build_portal(settings, kv)


@pytest.fixture
def admin_ctx(portal: Portal) -> RequestContext:
    return portal.sessions.context_for(ADMIN_CODE, "127.0.0.1")


@pytest.fixture
def officer_ctx(portal: Portal) -> RequestContext:
    return portal.sessions.context_for(OFFICER_CODE, "127.0.0.1")


@pytest.fixture
def staff_ctx(portal: Portal) -> RequestContext:
    return portal.sessions.context_for(STAFF_CODE, "127.0.0.1")


@pytest.fixture
def viewer_ctx(portal: Portal) -> RequestContext:
    return portal.sessions.context_for(VIEWER_CODE, "127.0.0.1")


@pytest.fixture
def anonymous_ctx() -> RequestContext:
    return RequestContext(actor=None)


@pytest.fixture
def add_document(portal: Portal) -> Callable[[str, list[str]], Document]:
    """Store a document with hand-made chunks, bypassing the chunker.

    Usage:
        doc = add_document("A", ["first chunk", "second chunk"])
    """

    def _add(title: str, contents: list[str]) -> Document:
        doc = Document(
            id=uuid4(),
            title=title,
            extracted_text="".join(contents),
            uploaded_by=2,
            uploaded_at=datetime.now(UTC),
        )
        portal.documents.add(doc)
        portal.index.append_all(
            ContentChunk(id=uuid4(), document_id=doc.id, content=content, order=order)
            for order, content in enumerate(contents)
        )
        return doc

    return _add


@pytest.fixture
def client(portal: Portal) -> TestClient:
    """Test client over the isolated portal."""
    return TestClient(create_app(portal.settings, portal))


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for an employee code."""

    def _headers(code: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {code}"}

    return _headers
