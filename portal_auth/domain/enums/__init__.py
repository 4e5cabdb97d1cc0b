"""Domain enums.

Usage:
    from portal_auth.domain.enums import AuditAction, AuditStatus, OtpPurpose
"""

from portal_auth.domain.enums.audit_action import AuditAction, AuditStatus
from portal_auth.domain.enums.otp_purpose import OtpPurpose

__all__ = ["AuditAction", "AuditStatus", "OtpPurpose"]
