"""Database models.

Importing this package registers every table on ``BaseModel.metadata``
(needed by ``Database.create_all`` and Alembic autogenerate).
"""

from portal_auth.infrastructure.persistence.models.account import AccountModel
from portal_auth.infrastructure.persistence.models.audit_log import AuditLogModel
from portal_auth.infrastructure.persistence.models.login_attempt import (
    LoginAttemptModel,
)
from portal_auth.infrastructure.persistence.models.otp_code import OtpCodeModel
from portal_auth.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)
from portal_auth.infrastructure.persistence.models.role import (
    PermissionModel,
    RoleModel,
    account_roles,
    role_permissions,
)
from portal_auth.infrastructure.persistence.models.tenant import TenantModel

__all__ = [
    "AccountModel",
    "AuditLogModel",
    "LoginAttemptModel",
    "OtpCodeModel",
    "PermissionModel",
    "RefreshTokenModel",
    "RoleModel",
    "TenantModel",
    "account_roles",
    "role_permissions",
]
