"""Internal failure reasons of the login state machine.

These strings land in audit records and logs only. The caller of the HTTP
API sees one of the wire codes in ``ErrorCode``; several reasons collapse
into ``invalid_credentials`` on purpose.
"""


class FailureReason:
    """Audit/log reasons for rejected or completed authentication steps."""

    RATE_LIMITED = "rate_limited"
    UNKNOWN_IDENTIFIER = "invalid_credentials"
    INVALID_PASSWORD = "invalid_password"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_LOCKED = "account_locked"
    TENANT_MISMATCH = "tenant_mismatch"
    INVALID_OTP = "invalid_otp"
    OTP_SENT = "otp_sent"
    AUTHENTICATED = "authenticated"
    REFRESH_NOT_FOUND = "refresh_token_not_found"
    REFRESH_EXPIRED = "refresh_token_expired"
    REFRESH_REVOKED = "refresh_token_revoked"
    REFRESH_ACCOUNT_UNAVAILABLE = "account_unavailable"
    ROTATED = "rotated"
    LOGGED_OUT = "logged_out"
