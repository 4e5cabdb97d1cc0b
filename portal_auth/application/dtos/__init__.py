"""Outcome values returned by the SessionFacade."""

from portal_auth.application.dtos.auth_outcomes import (
    AccountLocked,
    Authenticated,
    CredentialInvalid,
    IssuedTokens,
    LoginOutcome,
    OtpInvalid,
    OtpLoginOutcome,
    OtpRequired,
    RefreshInvalid,
    RefreshOutcome,
)
from portal_auth.application.dtos.login_attempt_dtos import LoginAttemptPage

__all__ = [
    "AccountLocked",
    "Authenticated",
    "CredentialInvalid",
    "IssuedTokens",
    "LoginAttemptPage",
    "LoginOutcome",
    "OtpInvalid",
    "OtpLoginOutcome",
    "OtpRequired",
    "RefreshInvalid",
    "RefreshOutcome",
]
