"""Domain errors.

Usage:
    from portal_auth.domain.errors import AuditError, FailureReason, MailError
"""

from portal_auth.domain.errors.audit_error import AuditError
from portal_auth.domain.errors.authentication_error import FailureReason
from portal_auth.domain.errors.mail_error import MailError

__all__ = ["AuditError", "FailureReason", "MailError"]
