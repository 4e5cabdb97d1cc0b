"""OtpCodeRepository protocol (port)."""

from datetime import datetime
from typing import Protocol


class OtpCodeRepository(Protocol):
    """Protocol for one-time code persistence.

    Invariant: at most one unexpired, unused code exists per
    (email, purpose).
    """

    async def replace_unused(
        self,
        *,
        email: str,
        purpose: str,
        code: str,
        expires_at: datetime,
    ) -> int:
        """Invalidate every unused code of (email, purpose) and store a new one.

        Both writes commit together.

        Returns:
            Number of codes that were superseded.
        """
        ...

    async def consume(
        self,
        *,
        email: str,
        code: str,
        purpose: str,
        now: datetime,
    ) -> bool:
        """Atomically mark a matching, unused, unexpired code as used.

        Must be a single conditional update so that two concurrent
        verifications of the same code cannot both succeed.

        Returns:
            True if a code was consumed by this call.
        """
        ...
