"""Document ingestion - persist docs and chunks."""

import logging
from uuid import uuid4

from backend.portal.access.envelope import AccessEnvelope
from backend.portal.db.context import RequestContext
from backend.portal.db.stores import DocumentStore, IndexStore
from backend.portal.docs.chunker import chunk_document
from backend.portal.models.common import ActionKind, CaseStatus, Role
from backend.portal.models.docs import Document, DocumentMetadata
from backend.portal.utils.metrics import PrometheusPortalMetrics

logger = logging.getLogger(__name__)


def normalize_text(text: str) -> str:
    """Normalize line endings to \\n."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_tags(tags: list[str]) -> list[str]:
    """Trim tags and drop empty ones, keeping order."""
    return [tag.strip() for tag in tags if tag.strip()]


def ingest_document(
    *,
    ctx: RequestContext,
    title: str,
    text: str,
    metadata: DocumentMetadata | None = None,
    status: CaseStatus = CaseStatus.active,
    documents: DocumentStore,
    index: IndexStore,
    envelope: AccessEnvelope,
    min_role: Role = Role.officer,
    max_chars: int = 500,
    metrics: PrometheusPortalMetrics | None = None,
) -> Document:
    """Ingest a document: chunk it, index it and audit the upload.

    Text extraction has already happened; whatever string arrives
    (including an empty one) is stored and chunked.

    Args:
        ctx: Request context of the uploading employee
        title: Case title
        text: Extracted document text
        metadata: Court, case number, tags and file details
        status: Initial case status
        documents: Document store
        index: Chunk index store
        envelope: Access and audit envelope
        min_role: Minimum role allowed to upload
        max_chars: Chunk size
        metrics: Metrics sink

    Returns:
        The stored Document

    Raises:
        PermissionDenied: If the employee may not upload
    """
    actor = envelope.require_role(ctx, min_role, operation="upload")

    metadata = metadata or DocumentMetadata()
    metadata = metadata.model_copy(update={"tags": normalize_tags(metadata.tags)})

    document = Document(
        id=uuid4(),
        title=title,
        status=status,
        metadata=metadata,
        extracted_text=normalize_text(text),
        uploaded_by=actor.actor_id,
        uploaded_at=envelope.now(),
    )
    chunks = chunk_document(document.id, document.extracted_text, max_chars=max_chars)

    # Three independent writes: document, chunks, audit record
    documents.add(document)
    appended = index.append_all(chunks)
    envelope.record(ctx, actor, ActionKind.upload, f"Uploaded case: {title}")

    (metrics or PrometheusPortalMetrics()).inc_chunks_indexed(appended)
    logger.info(f"Ingested document {document.id} ({appended} chunks) by {actor.employee_code}")

    return document
