"""Case document operations beyond upload: listing, viewing, editing."""

from uuid import UUID

from backend.portal.access.envelope import AccessEnvelope
from backend.portal.db.context import RequestContext
from backend.portal.db.stores import DocumentStore, IndexStore
from backend.portal.docs.ingest import normalize_tags
from backend.portal.models.common import ActionKind, CaseStatus, Role
from backend.portal.models.docs import ContentChunk, Document


class DocumentNotFound(Exception):
    """Raised when a document id does not resolve."""

    def __init__(self, document_id: UUID) -> None:
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class DocumentService:
    """Read and metadata-edit operations on stored documents."""

    def __init__(
        self,
        documents: DocumentStore,
        index: IndexStore,
        envelope: AccessEnvelope,
        *,
        read_min_role: Role = Role.staff,
        edit_min_role: Role = Role.officer,
    ) -> None:
        self._documents = documents
        self._index = index
        self._envelope = envelope
        self._read_min_role = read_min_role
        self._edit_min_role = edit_min_role

    def _get_or_raise(self, document_id: UUID) -> Document:
        document = self._documents.get(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    def list_documents(
        self, ctx: RequestContext, status: CaseStatus | None = None
    ) -> list[Document]:
        """List documents newest first, optionally filtered by status."""
        self._envelope.require_role(ctx, self._read_min_role, operation="list")
        documents = self._documents.list_all()
        if status is not None:
            documents = [document for document in documents if document.status == status]
        # Upload order breaks timestamp ties
        documents.reverse()
        documents.sort(key=lambda document: document.uploaded_at, reverse=True)
        return documents

    def view_document(self, ctx: RequestContext, document_id: UUID) -> Document:
        """Fetch one document and audit the view."""
        actor = self._envelope.require_role(ctx, self._read_min_role, operation="view")
        document = self._get_or_raise(document_id)
        self._envelope.record(ctx, actor, ActionKind.view, f"Viewed case: {document.title}")
        return document

    def document_chunks(self, ctx: RequestContext, document_id: UUID) -> list[ContentChunk]:
        """Chunks of one document in order."""
        self._envelope.require_role(ctx, self._read_min_role, operation="view")
        self._get_or_raise(document_id)
        return self._index.find_by_document(document_id)

    def update_metadata(
        self,
        ctx: RequestContext,
        document_id: UUID,
        *,
        title: str | None = None,
        status: CaseStatus | None = None,
        court: str | None = None,
        case_number: str | None = None,
        tags: list[str] | None = None,
    ) -> Document:
        """Edit title, status and case metadata.

        Extracted text and chunks are never touched. Fields left as None keep
        their stored value. Edits are not audited.
        """
        self._envelope.require_role(ctx, self._edit_min_role, operation="edit")
        document = self._get_or_raise(document_id)

        metadata_update: dict[str, object] = {}
        if court is not None:
            metadata_update["court"] = court
        if case_number is not None:
            metadata_update["case_number"] = case_number
        if tags is not None:
            metadata_update["tags"] = normalize_tags(tags)

        updated = document.model_copy(
            update={
                "title": title if title is not None else document.title,
                "status": status if status is not None else document.status,
                "metadata": document.metadata.model_copy(update=metadata_update),
            }
        )
        if not self._documents.replace(updated):
            raise DocumentNotFound(document_id)
        return updated

    def record_download(self, ctx: RequestContext, document_id: UUID) -> Document:
        """Audit a file download; the bytes are served elsewhere."""
        actor = self._envelope.require_role(ctx, self._read_min_role, operation="download")
        document = self._get_or_raise(document_id)
        self._envelope.record(
            ctx, actor, ActionKind.download, f"Downloaded case file: {document.title}"
        )
        return document
