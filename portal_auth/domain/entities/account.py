"""Account domain entity.

An account is a principal that can authenticate, optionally scoped to a
tenant. Accounts are created and deactivated by user management; the
authentication core only reads them and applies the failure/success
bookkeeping through the account repository.
"""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass
class Account:
    """Account as seen by the authentication core.

    Attributes:
        id: Numeric account identifier.
        tenant_id: Owning tenant, or None for a platform-wide account.
        username: Unique login name.
        email: Unique email address (also accepted as login identifier).
        password_hash: bcrypt hash of the password.
        is_active: Deactivated accounts can never log in.
        otp_enabled: Account requires an emailed one-time code after
            the password step.
        failed_login_attempts: Consecutive failures since the last success.
        locked_until: Lockout expiry, None when not locked.
        last_failed_login_at: Timestamp of the most recent failure.
        last_login_at: Timestamp of the most recent successful login.

    Example:
        >>> account = Account(
        ...     id=7,
        ...     tenant_id=None,
        ...     username="alice",
        ...     email="alice@example.com",
        ...     password_hash="$2b$12$...",
        ... )
        >>> account.is_platform_account
        True
    """

    id: int
    tenant_id: int | None
    username: str
    email: str
    password_hash: str
    is_active: bool = True
    otp_enabled: bool = False
    failed_login_attempts: int = 0
    locked_until: datetime | None = None
    last_failed_login_at: datetime | None = None
    last_login_at: datetime | None = None

    @property
    def is_platform_account(self) -> bool:
        """True when the account is not bound to any tenant."""
        return self.tenant_id is None

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check whether the lockout is still in force.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if locked_until is set and lies in the future.
        """
        if self.locked_until is None:
            return False
        return self.locked_until > (now or datetime.now(UTC))

    def belongs_to_tenant(self, tenant_id: int | None) -> bool:
        """Check the request's tenant constraint.

        A request without a tenant constraint accepts every account. With a
        constraint, only accounts of exactly that tenant qualify.
        """
        if tenant_id is None:
            return True
        return self.tenant_id == tenant_id
