"""
Route definition for the liveness endpoint.

``GET /health`` returns HTTP 200 whenever the process is running.  The
response carries ``Cache-Control: no-store, no-cache`` so that proxies do
not serve stale status to load balancers.
"""

import fastapi
import fastapi.responses

health_router = fastapi.APIRouter(tags=["Health"])

_INFRASTRUCTURE_CACHE_SUPPRESSION_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store, no-cache",
    "Pragma": "no-cache",
}


@health_router.get(
    "/health",
    summary="Liveness check",
    description="Returns a simple healthy status when the service is running.",
    status_code=200,
)
async def health_check() -> fastapi.responses.JSONResponse:
    """Return a simple healthy status when the service process is running."""
    return fastapi.responses.JSONResponse(
        content={"status": "healthy"},
        headers=_INFRASTRUCTURE_CACHE_SUPPRESSION_HEADERS,
    )
