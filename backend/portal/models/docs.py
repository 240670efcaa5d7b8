"""Case document domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.portal.models.common import CaseStatus


class DocumentMetadata(BaseModel):
    """Case metadata captured at upload and edited afterwards."""

    court: str | None = None
    case_number: str | None = None
    tags: list[str] = Field(default_factory=list)
    file_name: str | None = None
    file_size: int | None = None
    file_type: str | None = None


class Document(BaseModel):
    """Uploaded case document with its full extracted text."""

    id: UUID
    title: str
    status: CaseStatus = CaseStatus.active
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    extracted_text: str
    uploaded_by: int
    uploaded_at: datetime


class ContentChunk(BaseModel):
    """Immutable slice of a document's extracted text."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    document_id: UUID
    content: str
    order: int = Field(..., ge=0)  # 0-based
    embedding: list[float] = Field(default_factory=list)  # reserved, always empty


class SearchResult(BaseModel):
    """Lexical search hit joined with the owning document's title."""

    chunk: ContentChunk
    document_title: str


class AssistantAnswer(BaseModel):
    """Composed assistant answer and the documents it cites."""

    answer: str
    cited_document_ids: list[UUID] = Field(default_factory=list)
