"""Authentication commands.

Usage:
    from portal_auth.application.commands import LoginUser, RequestContext
"""

from portal_auth.application.commands.auth_commands import (
    LoginUser,
    LogoutUser,
    RefreshSession,
    RequestContext,
    VerifyOtpAndLogin,
)

__all__ = [
    "LoginUser",
    "LogoutUser",
    "RefreshSession",
    "RequestContext",
    "VerifyOtpAndLogin",
]
