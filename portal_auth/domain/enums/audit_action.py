"""Audit action and status vocabulary.

Values are persisted verbatim in ``audit_logs`` and queried by the audit
listing of the wider portal, so existing members must keep their values.
"""

from enum import Enum


class AuditAction(str, Enum):
    """Auditable events of the authentication core."""

    LOGIN_ATTEMPT = "login_attempt"
    OTP_VERIFICATION = "otp_verification"
    TOKEN_REFRESH = "token_refresh"
    LOGOUT = "logout"
    LOGIN_ATTEMPT_DELETED = "login_attempt_deleted"
    LOGIN_ATTEMPTS_PURGED = "login_attempts_purged"


class AuditStatus(str, Enum):
    """Outcome recorded with an audit entry."""

    SUCCESS = "success"
    FAILED = "failed"
    LOCKED = "locked"
    OTP_REQUIRED = "otp_required"
