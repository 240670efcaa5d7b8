"""Typed collections layered over the key-value store.

Each collection owns one logical key and one lock. Every write is
read-whole / modify / write-whole inside that lock, so two appends to the
same collection never interleave.
"""

import threading
from collections import deque
from collections.abc import Iterable
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from backend.portal.db.repositories import KeyValueStore
from backend.portal.models.docs import ContentChunk, Document
from backend.portal.models.logs import AuditRecord, QueryLogEntry

# Well-known logical keys
DOCUMENTS_KEY = "cases"
INDEX_KEY = "caseIndex"
QUERY_LOG_KEY = "chatHistory"
AUDIT_LOG_KEY = "auditLogs"

ModelT = TypeVar("ModelT", bound=BaseModel)


class _ListCollection(Generic[ModelT]):
    """Ordered list of pydantic models stored under one key."""

    def __init__(self, kv: KeyValueStore, key: str, model: type[ModelT]) -> None:
        self._kv = kv
        self._key = key
        self._model = model
        self._lock = threading.Lock()

    def _read(self) -> list[ModelT]:
        raw = self._kv.get(self._key) or []
        return [self._model.model_validate(item) for item in raw]

    def _write(self, items: Iterable[ModelT]) -> None:
        self._kv.set(self._key, [item.model_dump(mode="json") for item in items])


class DocumentStore(_ListCollection[Document]):
    """Case documents in upload order."""

    def __init__(self, kv: KeyValueStore) -> None:
        super().__init__(kv, DOCUMENTS_KEY, Document)

    def add(self, document: Document) -> None:
        """Append a newly uploaded document."""
        with self._lock:
            documents = self._read()
            documents.append(document)
            self._write(documents)

    def replace(self, document: Document) -> bool:
        """Replace the stored document with the same id.

        Returns:
            False if no document with that id exists
        """
        with self._lock:
            documents = self._read()
            for position, existing in enumerate(documents):
                if existing.id == document.id:
                    documents[position] = document
                    self._write(documents)
                    return True
            return False

    def get(self, document_id: UUID) -> Document | None:
        """Get document by ID."""
        for document in self._read():
            if document.id == document_id:
                return document
        return None

    def list_all(self) -> list[Document]:
        """All documents in upload order."""
        return self._read()

    def titles(self) -> dict[UUID, str]:
        """Map of document id to title for joining search hits."""
        return {document.id: document.title for document in self._read()}


class IndexStore(_ListCollection[ContentChunk]):
    """Flat, append-only collection of content chunks."""

    def __init__(self, kv: KeyValueStore) -> None:
        super().__init__(kv, INDEX_KEY, ContentChunk)

    def append_all(self, chunks: Iterable[ContentChunk]) -> int:
        """Insert a batch of chunks in a single write.

        Returns:
            Number of chunks appended
        """
        batch = list(chunks)
        with self._lock:
            stored = self._read()
            stored.extend(batch)
            self._write(stored)
        return len(batch)

    def find_by_document(self, document_id: UUID) -> list[ContentChunk]:
        """Chunks of one document sorted by order."""
        chunks = [chunk for chunk in self._read() if chunk.document_id == document_id]
        chunks.sort(key=lambda chunk: chunk.order)
        return chunks

    def scan_all(self) -> list[ContentChunk]:
        """All chunks in insertion order."""
        return self._read()


class BoundedLog(_ListCollection[ModelT]):
    """Append-only log keeping at most `capacity` entries.

    Oldest entries are evicted first. Storage order is insertion order;
    newest-first is a read option.
    """

    def __init__(self, kv: KeyValueStore, key: str, model: type[ModelT], capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        super().__init__(kv, key, model)
        self._capacity = capacity

    def append(self, entry: ModelT) -> None:
        """Append an entry, evicting the oldest when full."""
        with self._lock:
            ring = deque(self._read(), maxlen=self._capacity)
            ring.append(entry)
            self._write(ring)

    def entries(self, *, newest_first: bool = False) -> list[ModelT]:
        """Retained entries, oldest first unless newest_first is set."""
        items = self._read()
        if newest_first:
            items.reverse()
        return items

    def __len__(self) -> int:
        return len(self._read())


def create_query_log(kv: KeyValueStore, capacity: int) -> BoundedLog[QueryLogEntry]:
    """Assistant query history log."""
    return BoundedLog(kv, QUERY_LOG_KEY, QueryLogEntry, capacity)


def create_audit_log(kv: KeyValueStore, capacity: int) -> BoundedLog[AuditRecord]:
    """Audit trail log."""
    return BoundedLog(kv, AUDIT_LOG_KEY, AuditRecord, capacity)
