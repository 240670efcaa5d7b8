"""Session endpoints - POST /session/login, POST /session/logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from backend.portal.access.session import AuthenticationError
from backend.portal.api.auth import client_origin, get_current_context, get_portal
from backend.portal.container import Portal
from backend.portal.db.context import RequestContext
from backend.portal.models.common import Role

router = APIRouter(prefix="/session", tags=["session"])


class LoginRequest(BaseModel):
    """Request body for POST /session/login."""

    credential: str = Field(
        ..., min_length=1, description="Employee code or registered mobile number"
    )


class LoginResponse(BaseModel):
    """Response for POST /session/login."""

    token: str
    actor_id: int
    name: str
    role: Role


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    portal: Annotated[Portal, Depends(get_portal)],
) -> LoginResponse:
    """Authenticate an employee and audit the login.

    Returns:
        Bearer token (the employee code) and the employee's role

    Raises:
        HTTPException: 401 if the credential is unknown or inactive
    """
    try:
        ctx = portal.sessions.login(body.credential.strip(), client_origin(request, portal))
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    assert ctx.actor is not None
    return LoginResponse(
        token=ctx.actor.employee_code,
        actor_id=ctx.actor.actor_id,
        name=ctx.actor.name,
        role=ctx.actor.role,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    portal: Annotated[Portal, Depends(get_portal)],
) -> None:
    """Audit a logout for the current employee."""
    portal.sessions.logout(ctx)
