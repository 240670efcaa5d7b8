"""Health check endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.portal.api.auth import get_portal
from backend.portal.container import Portal

router = APIRouter()


def check_store(portal: Portal) -> tuple[bool, str]:
    """Check key-value store connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        if portal.kv.ping():
            return (True, "ok")
        return (False, "error: no response")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
def healthz(portal: Annotated[Portal, Depends(get_portal)]) -> dict[str, Any] | JSONResponse:
    """Health check endpoint.

    Returns:
        200 with component status if the store answers
        503 if it does not
    """
    store_ok, store_status = check_store(portal)

    response_body: dict[str, Any] = {
        "status": "ok" if store_ok else "degraded",
        "components": {
            "store": store_status,
            "backend": portal.settings.storage_backend,
        },
    }

    if not store_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body
