"""Append-only log entry models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from backend.portal.models.common import ActionKind


class QueryLogEntry(BaseModel):
    """One assistant interaction."""

    id: UUID
    query: str
    answer: str
    timestamp: datetime
    source_document_ids: list[UUID] = Field(default_factory=list)


class AuditRecord(BaseModel):
    """Structured audit trail entry."""

    id: UUID
    actor_id: int
    action_kind: ActionKind
    detail: str
    origin: str
    timestamp: datetime
