"""Repository dependency factories.

Request-scoped repository instances sharing the request's session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from portal_auth.infrastructure.persistence.repositories import (
        AccountRepository,
        LoginAttemptRepository,
        OtpCodeRepository,
        PermissionRepository,
        RefreshTokenRepository,
        TenantRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_account_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "AccountRepository":
    """Get account repository (request-scoped).

    Args:
        session: Database session for request duration.

    Returns:
        AccountRepository instance.
    """
    from portal_auth.infrastructure.persistence.repositories import AccountRepository

    return AccountRepository(session=session)


async def get_login_attempt_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginAttemptRepository":
    """Get login attempt repository (request-scoped)."""
    from portal_auth.infrastructure.persistence.repositories import (
        LoginAttemptRepository,
    )

    return LoginAttemptRepository(session=session)


async def get_otp_code_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "OtpCodeRepository":
    """Get one-time code repository (request-scoped)."""
    from portal_auth.infrastructure.persistence.repositories import OtpCodeRepository

    return OtpCodeRepository(session=session)


async def get_refresh_token_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshTokenRepository":
    """Get refresh token repository (request-scoped)."""
    from portal_auth.infrastructure.persistence.repositories import (
        RefreshTokenRepository,
    )

    return RefreshTokenRepository(session=session)


async def get_permission_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "PermissionRepository":
    """Get permission repository (request-scoped)."""
    from portal_auth.infrastructure.persistence.repositories import (
        PermissionRepository,
    )

    return PermissionRepository(session=session)


async def get_tenant_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "TenantRepository":
    """Get tenant repository (request-scoped)."""
    from portal_auth.infrastructure.persistence.repositories import TenantRepository

    return TenantRepository(session=session)
