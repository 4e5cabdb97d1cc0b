"""Outcomes of the login, OTP and refresh flows.

Each flow returns a tagged union of frozen dataclasses instead of a set of
booleans, so callers handle every state with ``match``:

    match await facade.login(command):
        case Authenticated(tokens=tokens):
            ...
        case OtpRequired(masked_email=masked):
            ...
        case AccountLocked(locked_until=until):
            ...
        case CredentialInvalid():
            ...

Throttling has no variant of its own: a throttled attempt is reported as
CredentialInvalid / OtpInvalid and the distinction lives only in audit and
logs.
"""

from dataclasses import dataclass
from datetime import datetime

from portal_auth.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedTokens:
    """Token pair minted for an account.

    Attributes:
        access_token: Signed access token.
        access_expires_at: Access token expiry.
        refresh_token: Raw opaque refresh token (only ever sent to the client).
        refresh_expires_at: Refresh token expiry.
        account_id: Subject.
        username: Login name.
        tenant_id: Tenant, None for platform accounts.
    """

    access_token: str
    access_expires_at: datetime
    refresh_token: str
    refresh_expires_at: datetime
    account_id: int
    username: str
    tenant_id: int | None


@dataclass(frozen=True, slots=True, kw_only=True)
class Authenticated:
    """Login (or renewal) completed; tokens were minted."""

    tokens: IssuedTokens


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpRequired:
    """Password accepted, a one-time code was sent.

    Attributes:
        masked_email: Destination of the code, masked for display.
    """

    masked_email: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLocked:
    """Account is locked out after repeated failures.

    Attributes:
        locked_until: Lockout expiry.
    """

    locked_until: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialInvalid:
    """Generic rejection of a password login."""

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpInvalid:
    """Wrong, expired or already used one-time code."""

    code: ErrorCode = ErrorCode.INVALID_OTP


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshInvalid:
    """Refresh token missing, unknown, expired or revoked.

    Attributes:
        code: ``no_refresh_token`` or ``invalid_refresh_token``.
    """

    code: ErrorCode = ErrorCode.INVALID_REFRESH_TOKEN


type LoginOutcome = Authenticated | OtpRequired | AccountLocked | CredentialInvalid
type OtpLoginOutcome = Authenticated | AccountLocked | OtpInvalid
type RefreshOutcome = Authenticated | RefreshInvalid
