"""AccountRepository protocol (port).

The credential store. Besides lookups it exposes exactly two mutations,
the failure and success bookkeeping; nothing else in the authentication
core writes to an account.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from portal_auth.domain.entities import Account


@dataclass(frozen=True, slots=True, kw_only=True)
class LockoutState:
    """Counter and lockout after a failure was recorded.

    Attributes:
        failed_login_attempts: Count including the failure just recorded.
        locked_until: Lockout expiry derived from that count, or None.
    """

    failed_login_attempts: int
    locked_until: datetime | None


class AccountRepository(Protocol):
    """Protocol for account lookup and login bookkeeping.

    Implementations:
        - AccountRepository (SQLAlchemy):
          portal_auth/infrastructure/persistence/repositories/
    """

    async def find_by_username_or_email(self, identifier: str) -> Account | None:
        """Find a live account whose username or email equals identifier.

        Soft-deleted accounts are never returned.

        Args:
            identifier: Username or email as typed by the user.

        Returns:
            Account if found, None otherwise.
        """
        ...

    async def find_by_id(self, account_id: int) -> Account | None:
        """Find a live account by id."""
        ...

    async def record_failed_login(
        self, account_id: int, *, now: datetime
    ) -> LockoutState | None:
        """Count one failed login and apply the lockout policy.

        The increment must be atomic (increment-and-fetch in a single
        statement) so that concurrent failures are never under-counted, and
        the lockout must be derived from the fetched count.

        Args:
            account_id: Account that failed to authenticate.
            now: Time of the failure (stamped as last failed login).

        Returns:
            New counter and lockout, or None if the account vanished.
        """
        ...

    async def record_successful_login(self, account_id: int, *, now: datetime) -> None:
        """Reset counter and lockout together and stamp the last login."""
        ...
