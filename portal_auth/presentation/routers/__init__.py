"""HTTP routers.

Usage:
    from portal_auth.presentation.routers import v1_router

    app.include_router(v1_router)
"""

from fastapi import APIRouter

from portal_auth.core.config import settings
from portal_auth.presentation.routers.api.v1.auth import router as auth_router
from portal_auth.presentation.routers.api.v1.login_attempts import (
    router as login_attempts_router,
)
from portal_auth.presentation.routers.system import system_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(auth_router)
v1_router.include_router(login_attempts_router)
v1_router.include_router(system_router)

__all__ = ["system_router", "v1_router"]
