"""Audit trail endpoint - GET /audit."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.portal.api.auth import get_current_context, get_portal
from backend.portal.container import Portal
from backend.portal.db.context import RequestContext
from backend.portal.models.common import ActionKind
from backend.portal.models.logs import AuditRecord

router = APIRouter(prefix="/audit", tags=["audit"])


class AuditResponse(BaseModel):
    """Response for GET /audit."""

    records: list[AuditRecord]


@router.get("", response_model=AuditResponse)
def list_audit_records(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
    action_kind: ActionKind | None = None,
    actor_id: int | None = None,
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
) -> AuditResponse:
    """Audit records newest first, optionally filtered by action and actor."""
    records = portal.envelope.read_audit_trail(
        ctx,
        portal.settings.audit_min_role,
        action_kind=action_kind,
        actor_id=actor_id,
        limit=limit,
    )
    return AuditResponse(records=records)
