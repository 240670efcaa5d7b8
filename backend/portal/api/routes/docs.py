"""Document endpoints - upload, list, view, edit, chunks, search, download."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backend.portal.api.auth import get_current_context, get_portal
from backend.portal.container import Portal
from backend.portal.db.context import RequestContext
from backend.portal.models.common import CaseStatus
from backend.portal.models.docs import ContentChunk, Document, DocumentMetadata, SearchResult

router = APIRouter(prefix="/docs", tags=["docs"])


class CreateDocRequest(BaseModel):
    """Request body for POST /docs."""

    title: str = Field(..., min_length=1, max_length=200, description="Case title")
    text: str = Field("", description="Extracted document text")
    status: CaseStatus = CaseStatus.active
    court: str | None = None
    case_number: str | None = None
    tags: list[str] = Field(default_factory=list)
    file_name: str | None = None
    file_size: int | None = Field(None, ge=0)
    file_type: str | None = None


class CreateDocResponse(BaseModel):
    """Response for POST /docs."""

    doc_id: UUID
    title: str
    status: CaseStatus
    chunk_count: int
    uploaded_at: datetime


class UpdateDocRequest(BaseModel):
    """Request body for PATCH /docs/{doc_id}."""

    title: str | None = Field(None, min_length=1, max_length=200)
    status: CaseStatus | None = None
    court: str | None = None
    case_number: str | None = None
    tags: list[str] | None = None


class DocListResponse(BaseModel):
    """Response for GET /docs."""

    docs: list[Document]


class DocChunksResponse(BaseModel):
    """Response for GET /docs/{doc_id}/chunks."""

    doc_id: UUID
    chunks: list[ContentChunk]


class DocSearchResponse(BaseModel):
    """Response for GET /docs/search."""

    results: list[SearchResult]
    query: str


@router.post("", response_model=CreateDocResponse, status_code=status.HTTP_201_CREATED)
def create_doc(
    request: CreateDocRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> CreateDocResponse:
    """Upload a case document with automatic chunking."""
    doc = portal.upload(
        ctx,
        title=request.title,
        text=request.text,
        status=request.status,
        metadata=DocumentMetadata(
            court=request.court,
            case_number=request.case_number,
            tags=request.tags,
            file_name=request.file_name,
            file_size=request.file_size,
            file_type=request.file_type,
        ),
    )

    return CreateDocResponse(
        doc_id=doc.id,
        title=doc.title,
        status=doc.status,
        chunk_count=len(portal.index.find_by_document(doc.id)),
        uploaded_at=doc.uploaded_at,
    )


@router.get("", response_model=DocListResponse)
def list_docs(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
    status_filter: Annotated[CaseStatus | None, Query(alias="status")] = None,
) -> DocListResponse:
    """List case documents, newest first."""
    return DocListResponse(docs=portal.document_service.list_documents(ctx, status=status_filter))


@router.get("/search", response_model=DocSearchResponse)
def search_docs_endpoint(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
    query: str = "",
) -> DocSearchResponse:
    """Case-insensitive substring search over document chunks.

    A blank query returns no results and is not audited.
    """
    results = portal.search_engine.search(query, ctx)
    return DocSearchResponse(results=results, query=query.strip())


@router.get("/{doc_id}", response_model=Document)
def get_doc(
    doc_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> Document:
    """Fetch one case document (audited as a view)."""
    return portal.document_service.view_document(ctx, doc_id)


@router.patch("/{doc_id}", response_model=Document)
def update_doc(
    doc_id: UUID,
    request: UpdateDocRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> Document:
    """Edit case title, status and metadata."""
    return portal.document_service.update_metadata(
        ctx,
        doc_id,
        title=request.title,
        status=request.status,
        court=request.court,
        case_number=request.case_number,
        tags=request.tags,
    )


@router.get("/{doc_id}/chunks", response_model=DocChunksResponse)
def get_doc_chunks(
    doc_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> DocChunksResponse:
    """List one document's chunks in order."""
    return DocChunksResponse(
        doc_id=doc_id, chunks=portal.document_service.document_chunks(ctx, doc_id)
    )


@router.post("/{doc_id}/download", response_model=Document)
def download_doc(
    doc_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> Document:
    """Audit a file download and return the document's file details."""
    return portal.document_service.record_download(ctx, doc_id)
