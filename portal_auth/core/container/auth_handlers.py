"""Authentication service dependency factories.

Request-scoped service instances wired from repositories, the audit
adapter and application-scoped singletons.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from portal_auth.core.config import settings
from portal_auth.core.container.infrastructure import (
    get_audit,
    get_credential_verifier,
    get_logger,
    get_mail_dispatcher,
    get_refresh_token_service,
    get_token_service,
)
from portal_auth.core.container.repositories import (
    get_account_repository,
    get_login_attempt_repository,
    get_otp_code_repository,
    get_permission_repository,
    get_refresh_token_repository,
    get_tenant_repository,
)

if TYPE_CHECKING:
    from portal_auth.application.services import LoginAttemptAdmin, SessionFacade
    from portal_auth.domain.protocols import AuditProtocol, TenantResolverProtocol
    from portal_auth.infrastructure.persistence.repositories import (
        AccountRepository,
        LoginAttemptRepository,
        OtpCodeRepository,
        PermissionRepository,
        RefreshTokenRepository,
        TenantRepository,
    )


# ============================================================================
# Authentication Service Factories
# ============================================================================


async def get_session_facade(
    accounts: "AccountRepository" = Depends(get_account_repository),
    attempts: "LoginAttemptRepository" = Depends(get_login_attempt_repository),
    otp_codes: "OtpCodeRepository" = Depends(get_otp_code_repository),
    refresh_tokens: "RefreshTokenRepository" = Depends(get_refresh_token_repository),
    permissions: "PermissionRepository" = Depends(get_permission_repository),
    audit: "AuditProtocol" = Depends(get_audit),
) -> "SessionFacade":
    """Get SessionFacade (request-scoped).

    All repositories share the request session; the audit adapter runs on
    its own session.

    Returns:
        SessionFacade instance.
    """
    from portal_auth.application.services import (
        LoginThrottle,
        OtpChallenge,
        SessionFacade,
        TokenIssuer,
    )

    return SessionFacade(
        throttle=LoginThrottle(
            attempts,
            max_attempts=settings.login_rate_limit_attempts,
            window_seconds=settings.login_rate_limit_window_seconds,
        ),
        accounts=accounts,
        verifier=get_credential_verifier(),
        otp=OtpChallenge(otp_codes, ttl_minutes=settings.otp_expire_minutes),
        mail=get_mail_dispatcher(),
        permissions=permissions,
        issuer=TokenIssuer(
            token_service=get_token_service(),
            refresh_token_service=get_refresh_token_service(),
            refresh_tokens=refresh_tokens,
        ),
        audit=audit,
        logger=get_logger(),
        require_otp=settings.login_otp_enabled,
    )


async def get_login_attempt_admin(
    attempts: "LoginAttemptRepository" = Depends(get_login_attempt_repository),
    audit: "AuditProtocol" = Depends(get_audit),
) -> "LoginAttemptAdmin":
    """Get LoginAttemptAdmin (request-scoped)."""
    from portal_auth.application.services import LoginAttemptAdmin

    return LoginAttemptAdmin(attempts=attempts, audit=audit, logger=get_logger())


async def get_tenant_resolver(
    tenants: "TenantRepository" = Depends(get_tenant_repository),
) -> "TenantResolverProtocol":
    """Get host-based tenant resolver (request-scoped)."""
    from portal_auth.infrastructure.tenancy import HostTenantResolver

    return HostTenantResolver(tenants)
