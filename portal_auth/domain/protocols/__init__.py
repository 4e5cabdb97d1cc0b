"""Domain protocols (ports).

Infrastructure provides the adapters; the application layer depends only on
these structural types.

Usage:
    from portal_auth.domain.protocols import AccountRepository, AuditProtocol
"""

from portal_auth.domain.protocols.account_repository import (
    AccountRepository,
    LockoutState,
)
from portal_auth.domain.protocols.audit_protocol import AuditProtocol
from portal_auth.domain.protocols.logger_protocol import LoggerProtocol
from portal_auth.domain.protocols.login_attempt_repository import (
    LoginAttemptRepository,
)
from portal_auth.domain.protocols.mail_dispatcher_protocol import (
    MailDispatcherProtocol,
)
from portal_auth.domain.protocols.otp_code_repository import OtpCodeRepository
from portal_auth.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from portal_auth.domain.protocols.permission_resolver_protocol import (
    PermissionResolverProtocol,
)
from portal_auth.domain.protocols.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)
from portal_auth.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from portal_auth.domain.protocols.tenant_resolver_protocol import (
    TenantResolverProtocol,
)
from portal_auth.domain.protocols.token_generation_protocol import (
    TokenGenerationProtocol,
)

__all__ = [
    "AccountRepository",
    "AuditProtocol",
    "LockoutState",
    "LoggerProtocol",
    "LoginAttemptRepository",
    "MailDispatcherProtocol",
    "OtpCodeRepository",
    "PasswordHashingProtocol",
    "PermissionResolverProtocol",
    "RefreshTokenData",
    "RefreshTokenRepository",
    "RefreshTokenServiceProtocol",
    "TenantResolverProtocol",
    "TokenGenerationProtocol",
]
