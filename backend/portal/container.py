"""Explicit wiring of stores and components."""

from dataclasses import dataclass

from backend.portal.access.directory import EmployeeDirectory
from backend.portal.access.envelope import AccessEnvelope
from backend.portal.access.session import SessionManager
from backend.portal.config import Settings
from backend.portal.db.context import RequestContext
from backend.portal.db.engine import create_kv_store
from backend.portal.db.repositories import KeyValueStore
from backend.portal.db.stores import (
    BoundedLog,
    DocumentStore,
    IndexStore,
    create_audit_log,
    create_query_log,
)
from backend.portal.docs.assistant import RetrievalComposer
from backend.portal.docs.ingest import ingest_document
from backend.portal.docs.retriever import LexicalSearchEngine
from backend.portal.docs.service import DocumentService
from backend.portal.models.common import CaseStatus
from backend.portal.models.docs import Document, DocumentMetadata
from backend.portal.models.logs import AuditRecord, QueryLogEntry
from backend.portal.utils.logging import StructuredQueryLogger
from backend.portal.utils.metrics import PrometheusPortalMetrics


@dataclass
class Portal:
    """Owned store handles and the components built on them."""

    settings: Settings
    kv: KeyValueStore
    documents: DocumentStore
    index: IndexStore
    query_log: BoundedLog[QueryLogEntry]
    audit_log: BoundedLog[AuditRecord]
    envelope: AccessEnvelope
    sessions: SessionManager
    search_engine: LexicalSearchEngine
    assistant: RetrievalComposer
    document_service: DocumentService
    metrics: PrometheusPortalMetrics

    def upload(
        self,
        ctx: RequestContext,
        *,
        title: str,
        text: str,
        metadata: DocumentMetadata | None = None,
        status: CaseStatus = CaseStatus.active,
    ) -> Document:
        """Upload pipeline entry point: chunk, index and audit."""
        return ingest_document(
            ctx=ctx,
            title=title,
            text=text,
            metadata=metadata,
            status=status,
            documents=self.documents,
            index=self.index,
            envelope=self.envelope,
            min_role=self.settings.upload_min_role,
            max_chars=self.settings.chunk_max_chars,
            metrics=self.metrics,
        )


def build_portal(settings: Settings, kv: KeyValueStore | None = None) -> Portal:
    """Build every component over one key-value store.

    Args:
        settings: Application settings
        kv: Store to use instead of the configured backend

    Returns:
        Wired Portal
    """
    kv = kv if kv is not None else create_kv_store(settings)
    metrics = PrometheusPortalMetrics()
    query_logger = StructuredQueryLogger()

    documents = DocumentStore(kv)
    index = IndexStore(kv)
    query_log = create_query_log(kv, settings.query_log_capacity)
    audit_log = create_audit_log(kv, settings.audit_log_capacity)

    envelope = AccessEnvelope(audit_log, query_logger=query_logger, metrics=metrics)

    return Portal(
        settings=settings,
        kv=kv,
        documents=documents,
        index=index,
        query_log=query_log,
        audit_log=audit_log,
        envelope=envelope,
        sessions=SessionManager(EmployeeDirectory(), envelope),
        search_engine=LexicalSearchEngine(
            documents,
            index,
            envelope,
            min_role=settings.search_min_role,
            query_logger=query_logger,
            metrics=metrics,
        ),
        assistant=RetrievalComposer(
            documents,
            index,
            query_log,
            envelope,
            min_role=settings.search_min_role,
            candidate_limit=settings.assistant_candidate_limit,
            quote_chars=settings.assistant_quote_chars,
            query_logger=query_logger,
            metrics=metrics,
        ),
        document_service=DocumentService(
            documents,
            index,
            envelope,
            read_min_role=settings.search_min_role,
            edit_min_role=settings.edit_min_role,
        ),
        metrics=metrics,
    )
