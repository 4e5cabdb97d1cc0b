"""Application services composing the authentication core.

Usage:
    from portal_auth.application.services import SessionFacade
"""

from portal_auth.application.services.credential_verifier import CredentialVerifier
from portal_auth.application.services.login_attempt_admin import LoginAttemptAdmin
from portal_auth.application.services.login_throttle import LoginThrottle
from portal_auth.application.services.otp_challenge import OtpChallenge
from portal_auth.application.services.session_facade import (
    SessionFacade,
    drain_pending_deliveries,
)
from portal_auth.application.services.token_issuer import TokenIssuer

__all__ = [
    "CredentialVerifier",
    "LoginAttemptAdmin",
    "LoginThrottle",
    "OtpChallenge",
    "SessionFacade",
    "TokenIssuer",
    "drain_pending_deliveries",
]
