"""LoginAttemptRepository protocol (port).

Login attempts are append-only. Rows are never updated; they are removed
only through the administrative purge operations.
"""

from datetime import datetime
from typing import Protocol

from portal_auth.domain.entities import LoginAttempt


class LoginAttemptRepository(Protocol):
    """Protocol for login attempt persistence."""

    async def add(
        self,
        *,
        ip_address: str,
        identifier: str | None,
        user_agent: str | None,
        attempted_at: datetime,
    ) -> None:
        """Append one attempt and commit it immediately."""
        ...

    async def count_since(self, ip_address: str, since: datetime) -> int:
        """Count attempts from ip_address strictly newer than since."""
        ...

    async def list_page(
        self,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> tuple[list[LoginAttempt], int]:
        """Return one page of attempts (newest first) and the total count.

        Args:
            page: 1-based page number.
            page_size: Rows per page.
            search: Optional substring matched against IP, identifier and
                user agent.
        """
        ...

    async def delete(self, attempt_id: int) -> bool:
        """Delete one attempt. Returns False if it did not exist."""
        ...

    async def purge(self, *, older_than: datetime | None = None) -> int:
        """Delete attempts older than a cutoff (all when None).

        Returns:
            Number of deleted rows.
        """
        ...
