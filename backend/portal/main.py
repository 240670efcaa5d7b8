"""FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from backend.portal.access.envelope import PermissionDenied
from backend.portal.api.routes.assistant import router as assistant_router
from backend.portal.api.routes.audit import router as audit_router
from backend.portal.api.routes.docs import router as docs_router
from backend.portal.api.routes.health import router as health_router
from backend.portal.api.routes.metrics import router as metrics_router
from backend.portal.api.routes.session import router as session_router
from backend.portal.config import Settings, get_settings
from backend.portal.container import Portal, build_portal
from backend.portal.docs.service import DocumentNotFound

logger = logging.getLogger(__name__)


async def permission_denied_handler(request: Request, exc: Exception) -> JSONResponse:
    """401 for unauthenticated callers, 403 for insufficient role."""
    assert isinstance(exc, PermissionDenied)
    if exc.actor is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


async def document_not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    """404 for unknown document ids."""
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app(settings: Settings | None = None, portal: Portal | None = None) -> FastAPI:
    """Build the application around one wired Portal.

    Args:
        settings: Settings to use instead of the environment
        portal: Pre-built portal (tests inject isolated stores this way)

    Returns:
        FastAPI application
    """
    settings = settings or get_settings()
    portal = portal or build_portal(settings)

    # /docs belongs to the document router
    app = FastAPI(title="Case Portal API", version="0.1.0", docs_url="/api-docs")
    app.state.portal = portal

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(session_router)
    app.include_router(docs_router)
    app.include_router(assistant_router)
    app.include_router(audit_router)

    app.add_exception_handler(PermissionDenied, permission_denied_handler)
    app.add_exception_handler(DocumentNotFound, document_not_found_handler)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Case Portal API", "version": "0.1.0"}

    logger.info(f"Case portal ready with {settings.storage_backend} storage")
    return app


app = create_app()
