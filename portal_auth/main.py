"""
Main FastAPI application entry point.

Wires middleware, exception handlers and routers, and owns the process
lifespan: the credential verifier's decoy hash is generated before the
first request is served, and the database pool is disposed on shutdown.

Run:
    uvicorn portal_auth.main:app
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal_auth.application.services import drain_pending_deliveries
from portal_auth.core.config import settings
from portal_auth.core.container import (
    get_credential_verifier,
    get_database,
    get_logger,
)
from portal_auth.presentation.api.middleware.trace_middleware import (
    TRACE_HEADER,
    TraceMiddleware,
)
from portal_auth.presentation.routers import v1_router
from portal_auth.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: build the decoy hash (one bcrypt round trip, off the loop)
    - Shutdown: let in-flight code deliveries finish, dispose of the
      database engine

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    await asyncio.to_thread(get_credential_verifier)
    logger.info(
        "Application started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await drain_pending_deliveries(timeout=settings.smtp_timeout_seconds)
    await get_database().close()
    logger.info("Application stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Authentication and session service",
    version=settings.app_version,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    debug=settings.debug,
    lifespan=lifespan,
)

# Cookies are the primary transport, so CORS must allow credentials
if settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", TRACE_HEADER],
        expose_headers=[TRACE_HEADER],
    )

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

# Include API v1 routers
app.include_router(v1_router)
