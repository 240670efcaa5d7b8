"""Auth dependencies resolving the acting employee.

Stub bearer scheme: the token is the employee code issued by POST /session/login.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from backend.portal.access.session import AuthenticationError
from backend.portal.container import Portal
from backend.portal.db.context import RequestContext


def get_portal(request: Request) -> Portal:
    """Portal wired onto the application at startup."""
    return request.app.state.portal


def client_origin(request: Request, portal: Portal) -> str:
    """Client address of the request, or the configured default when unknown."""
    if request.client and request.client.host:
        return request.client.host
    return portal.settings.default_origin


async def get_current_context(
    request: Request,
    portal: Annotated[Portal, Depends(get_portal)],
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    - No header: unauthenticated context (role-gated routes then answer 401)
    - "Bearer <employee_code>": context for that active employee

    Args:
        request: Incoming request (source of the client address)
        portal: Wired portal
        authorization: Authorization header (e.g., "Bearer LAW002")

    Returns:
        RequestContext, authenticated or not

    Raises:
        HTTPException: If authorization is malformed or unknown
    """
    origin = client_origin(request, portal)

    if not authorization:
        return RequestContext(actor=None, origin=origin)

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:].strip()  # Strip "Bearer "

    try:
        return portal.sessions.context_for(token, origin)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
