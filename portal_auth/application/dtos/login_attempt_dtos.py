"""Login attempt listing DTOs."""

from dataclasses import dataclass

from portal_auth.domain.entities import LoginAttempt


@dataclass(frozen=True, kw_only=True)
class LoginAttemptPage:
    """One page of login attempts.

    Attributes:
        items: Attempts on this page, newest first.
        total: Number of attempts matching the filter.
        page: 1-based page number.
        page_size: Requested page size.
    """

    items: list[LoginAttempt]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Number of pages for the current filter."""
        return (self.total + self.page_size - 1) // self.page_size if self.total else 0
