"""Audit sink errors.

An AuditError is always inspected and dropped by the caller: losing an
audit row must never change the outcome of a login.
"""

from dataclasses import dataclass

from portal_auth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit record could not be written.

    Attributes:
        code: ErrorCode.AUDIT_RECORD_FAILED.
        message: Human-readable message.
        details: Optional context (action, database error type).
    """
