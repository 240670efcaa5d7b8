"""Integration tests for document, index and bounded log stores."""

import threading
import uuid
from datetime import UTC, datetime

import pytest

from backend.portal.db.inmemory import InMemoryKeyValueStore
from backend.portal.db.stores import (
    AUDIT_LOG_KEY,
    INDEX_KEY,
    BoundedLog,
    DocumentStore,
    IndexStore,
    create_audit_log,
    create_query_log,
)
from backend.portal.models.common import ActionKind
from backend.portal.models.docs import ContentChunk, Document
from backend.portal.models.logs import AuditRecord, QueryLogEntry


def _chunks(doc_id: uuid.UUID, contents: list[str]) -> list[ContentChunk]:
    return [
        ContentChunk(id=uuid.uuid4(), document_id=doc_id, content=content, order=order)
        for order, content in enumerate(contents)
    ]


def _audit(detail: str) -> AuditRecord:
    return AuditRecord(
        id=uuid.uuid4(),
        actor_id=1,
        action_kind=ActionKind.search,
        detail=detail,
        origin="127.0.0.1",
        timestamp=datetime.now(UTC),
    )


def test_scan_all_preserves_insertion_order() -> None:
    """Test that batches come back in the order they were appended."""
    index = IndexStore(InMemoryKeyValueStore())
    doc_a, doc_b = uuid.uuid4(), uuid.uuid4()

    index.append_all(_chunks(doc_a, ["a0", "a1"]))
    index.append_all(_chunks(doc_b, ["b0"]))

    assert [chunk.content for chunk in index.scan_all()] == ["a0", "a1", "b0"]


def test_find_by_document_sorted_by_order() -> None:
    """Test that per-document lookup sorts by order even if stored out of order."""
    index = IndexStore(InMemoryKeyValueStore())
    doc_id = uuid.uuid4()
    chunks = _chunks(doc_id, ["zero", "one", "two"])

    index.append_all([chunks[2], chunks[0], chunks[1]])
    index.append_all(_chunks(uuid.uuid4(), ["other"]))

    assert [chunk.content for chunk in index.find_by_document(doc_id)] == ["zero", "one", "two"]


def test_append_all_writes_one_list_under_index_key() -> None:
    """Test the persisted layout: one ordered list under the well-known key."""
    kv = InMemoryKeyValueStore()
    index = IndexStore(kv)

    appended = index.append_all(_chunks(uuid.uuid4(), ["x", "y"]))

    assert appended == 2
    stored = kv.get(INDEX_KEY)
    assert stored is not None
    assert [item["content"] for item in stored] == ["x", "y"]


def test_concurrent_batches_never_interleave() -> None:
    """Test that parallel appends keep each batch contiguous and complete."""
    index = IndexStore(InMemoryKeyValueStore())
    doc_ids = [uuid.uuid4() for _ in range(8)]

    threads = [
        threading.Thread(target=index.append_all, args=(_chunks(doc_id, ["p"] * 5),))
        for doc_id in doc_ids
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = index.scan_all()
    assert len(stored) == 40
    for start in range(0, 40, 5):
        batch = stored[start : start + 5]
        assert len({chunk.document_id for chunk in batch}) == 1
        assert [chunk.order for chunk in batch] == [0, 1, 2, 3, 4]


def test_document_store_replace_and_titles() -> None:
    """Test document add, replace and title map."""
    documents = DocumentStore(InMemoryKeyValueStore())
    doc = Document(
        id=uuid.uuid4(),
        title="Original",
        extracted_text="text",
        uploaded_by=2,
        uploaded_at=datetime.now(UTC),
    )
    documents.add(doc)

    assert documents.replace(doc.model_copy(update={"title": "Renamed"})) is True
    assert documents.titles() == {doc.id: "Renamed"}
    assert documents.replace(doc.model_copy(update={"id": uuid.uuid4()})) is False
    assert documents.get(uuid.uuid4()) is None


def test_bounded_log_evicts_oldest_first() -> None:
    """Test that the log keeps only the newest `capacity` entries."""
    log = create_audit_log(InMemoryKeyValueStore(), capacity=3)

    for n in range(5):
        log.append(_audit(f"entry {n}"))

    assert [record.detail for record in log.entries()] == ["entry 2", "entry 3", "entry 4"]
    assert [record.detail for record in log.entries(newest_first=True)] == [
        "entry 4",
        "entry 3",
        "entry 2",
    ]
    assert len(log) == 3


def test_bounded_log_trims_when_capacity_shrinks() -> None:
    """Test that an existing oversize log is trimmed on the next append."""
    kv = InMemoryKeyValueStore()
    wide = create_audit_log(kv, capacity=10)
    for n in range(6):
        wide.append(_audit(f"entry {n}"))

    narrow = BoundedLog(kv, AUDIT_LOG_KEY, AuditRecord, capacity=2)
    narrow.append(_audit("entry 6"))

    assert [record.detail for record in narrow.entries()] == ["entry 5", "entry 6"]


def test_bounded_log_rejects_non_positive_capacity() -> None:
    """Test capacity validation."""
    with pytest.raises(ValueError):
        create_query_log(InMemoryKeyValueStore(), capacity=0)


def test_query_log_roundtrips_document_ids() -> None:
    """Test that cited ids survive serialization."""
    log = create_query_log(InMemoryKeyValueStore(), capacity=50)
    doc_id = uuid.uuid4()

    log.append(
        QueryLogEntry(
            id=uuid.uuid4(),
            query="q",
            answer="a",
            timestamp=datetime.now(UTC),
            source_document_ids=[doc_id],
        )
    )

    assert log.entries()[0].source_document_ids == [doc_id]
