"""Container module - centralized dependency injection.

Re-exports every factory so callers import from one place:

    from portal_auth.core.container import get_logger, get_session_facade

Organized by concern:
- infrastructure: logging, database, security services, mail, audit
- repositories: repository factories
- auth_handlers: authentication service factories
"""

from portal_auth.core.container.auth_handlers import (
    get_login_attempt_admin,
    get_session_facade,
    get_tenant_resolver,
)
from portal_auth.core.container.infrastructure import (
    get_audit,
    get_audit_session,
    get_credential_verifier,
    get_database,
    get_db_session,
    get_logger,
    get_mail_dispatcher,
    get_password_service,
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

__all__ = [
    # Infrastructure
    "get_audit",
    "get_audit_session",
    "get_credential_verifier",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_mail_dispatcher",
    "get_password_service",
    "get_refresh_token_service",
    "get_token_service",
    # Repositories
    "get_account_repository",
    "get_login_attempt_repository",
    "get_otp_code_repository",
    "get_permission_repository",
    "get_refresh_token_repository",
    "get_tenant_repository",
    # Services
    "get_login_attempt_admin",
    "get_session_facade",
    "get_tenant_resolver",
]
