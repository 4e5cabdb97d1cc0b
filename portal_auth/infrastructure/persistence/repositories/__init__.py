"""SQLAlchemy repository adapters.

Usage:
    from portal_auth.infrastructure.persistence.repositories import AccountRepository
"""

from portal_auth.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from portal_auth.infrastructure.persistence.repositories.login_attempt_repository import (
    LoginAttemptRepository,
)
from portal_auth.infrastructure.persistence.repositories.otp_code_repository import (
    OtpCodeRepository,
)
from portal_auth.infrastructure.persistence.repositories.permission_repository import (
    PermissionRepository,
)
from portal_auth.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from portal_auth.infrastructure.persistence.repositories.tenant_repository import (
    TenantRepository,
)

__all__ = [
    "AccountRepository",
    "LoginAttemptRepository",
    "OtpCodeRepository",
    "PermissionRepository",
    "RefreshTokenRepository",
    "TenantRepository",
]
