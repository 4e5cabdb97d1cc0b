"""Core enums package.

Usage:
    from portal_auth.core.enums import ErrorCode, Environment
"""

from portal_auth.core.enums.environment import Environment
from portal_auth.core.enums.error_code import ErrorCode
from portal_auth.core.enums.smtp_security import SmtpSecurity

__all__ = ["ErrorCode", "Environment", "SmtpSecurity"]
