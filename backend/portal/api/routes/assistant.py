"""Assistant endpoints - POST /assistant/ask, GET /assistant/history."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.portal.api.auth import get_current_context, get_portal
from backend.portal.container import Portal
from backend.portal.db.context import RequestContext
from backend.portal.docs.assistant import BlankQueryError
from backend.portal.models.docs import AssistantAnswer
from backend.portal.models.logs import QueryLogEntry

router = APIRouter(prefix="/assistant", tags=["assistant"])


class AskRequest(BaseModel):
    """Request body for POST /assistant/ask."""

    query: str = Field(..., min_length=1, max_length=1000, description="Natural-language question")


class HistoryResponse(BaseModel):
    """Response for GET /assistant/history."""

    entries: list[QueryLogEntry]


@router.post("/ask", response_model=AssistantAnswer)
def ask(
    request: AskRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> AssistantAnswer:
    """Answer a question from indexed case chunks.

    Raises:
        HTTPException: 422 if the query is blank after trimming
    """
    try:
        return portal.assistant.ask(request.query, ctx)
    except BlankQueryError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.get("/history", response_model=HistoryResponse)
def history(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> HistoryResponse:
    """Assistant query history, newest first."""
    return HistoryResponse(entries=portal.assistant.history(ctx, limit=limit))
