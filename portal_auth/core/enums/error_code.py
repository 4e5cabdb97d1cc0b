"""Machine-readable error codes.

The authentication codes double as the ``code`` member of HTTP problem
responses, so their values are part of the wire contract and must not be
renamed.
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Resources
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Authentication (wire codes)
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    INVALID_OTP = "invalid_otp"
    NO_REFRESH_TOKEN = "no_refresh_token"
    INVALID_REFRESH_TOKEN = "invalid_refresh_token"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"

    # Authorization
    PERMISSION_DENIED = "permission_denied"

    # Best-effort collaborators
    AUDIT_RECORD_FAILED = "audit_record_failed"
    MAIL_DISPATCH_FAILED = "mail_dispatch_failed"
