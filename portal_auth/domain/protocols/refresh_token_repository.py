"""RefreshTokenRepository protocol (port).

Only a digest of the opaque token is persisted; the raw value exists in
the client's cookie and nowhere else.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass
class RefreshTokenData:
    """Refresh token row without infrastructure types.

    Attributes:
        id: Row identifier.
        account_id: Owning account.
        token_hash: SHA-256 hex digest of the opaque token.
        expires_at: Absolute expiry.
        revoked: Revocation flag.
        revoked_at: When the token was revoked.
        revoked_reason: Why (rotated, logged_out, ...).
    """

    id: int
    account_id: int
    token_hash: str
    expires_at: datetime
    revoked: bool
    revoked_at: datetime | None = None
    revoked_reason: str | None = None


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence.

    Token lifecycle:
        1. Created at successful login
        2. Consumed (revoked with reason "rotated") on renewal, replaced by
           a new token
        3. Revoked on logout
        4. Unusable after expiry even if never revoked
    """

    async def add(self, *, account_id: int, token_hash: str, expires_at: datetime) -> None:
        """Persist a new, unrevoked token."""
        ...

    async def find_by_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Look up a token regardless of state (used for failure diagnostics)."""
        ...

    async def consume(
        self, token_hash: str, *, now: datetime, reason: str
    ) -> int | None:
        """Revoke the token only if it is still usable.

        Single conditional update: ``revoked = false AND expires_at > now``.

        Returns:
            Owning account id when this call revoked the token, else None.
        """
        ...

    async def revoke(self, token_hash: str, *, now: datetime, reason: str) -> bool:
        """Revoke a token if not already revoked. Returns True on change."""
        ...
