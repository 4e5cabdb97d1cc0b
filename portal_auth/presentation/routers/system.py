"""System endpoints (liveness)."""

from fastapi import APIRouter

from portal_auth.core.config import settings

system_router = APIRouter(tags=["System"])


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint for monitoring and load balancers.

    Returns:
        dict[str, str]: Health status indicator and version.
    """
    return {"status": "healthy", "version": settings.app_version}
