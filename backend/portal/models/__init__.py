"""Domain models for the case portal."""

from backend.portal.models.common import ActionKind, CaseStatus, Role
from backend.portal.models.docs import (
    AssistantAnswer,
    ContentChunk,
    Document,
    DocumentMetadata,
    SearchResult,
)
from backend.portal.models.logs import AuditRecord, QueryLogEntry

__all__ = [
    "ActionKind",
    "AssistantAnswer",
    "AuditRecord",
    "CaseStatus",
    "ContentChunk",
    "Document",
    "DocumentMetadata",
    "QueryLogEntry",
    "Role",
    "SearchResult",
]
