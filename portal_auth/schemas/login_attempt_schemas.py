"""Login attempt administration schemas.

Endpoints:
    GET    /api/v1/login-attempts        - Paged listing
    DELETE /api/v1/login-attempts/{id}   - Delete one row
    DELETE /api/v1/login-attempts        - Purge (optionally older than N minutes)
"""

from datetime import datetime

from pydantic import Field

from portal_auth.application.dtos import LoginAttemptPage
from portal_auth.domain.entities import LoginAttempt
from portal_auth.schemas.common_schemas import CamelModel


class LoginAttemptResponse(CamelModel):
    """One recorded attempt."""

    id: int
    ip_address: str
    identifier: str | None = None
    user_agent: str | None = None
    attempted_at: datetime

    @classmethod
    def from_entity(cls, attempt: LoginAttempt) -> "LoginAttemptResponse":
        return cls(
            id=attempt.id,
            ip_address=attempt.ip_address,
            identifier=attempt.identifier,
            user_agent=attempt.user_agent,
            attempted_at=attempt.attempted_at,
        )


class LoginAttemptListResponse(CamelModel):
    """Paged listing of attempts, newest first."""

    items: list[LoginAttemptResponse] = Field(default_factory=list)
    total: int = Field(..., description="Rows matching the filter")
    page: int = Field(..., description="Current page (1-indexed)")
    page_size: int = Field(..., description="Rows per page")
    total_pages: int = Field(..., description="Number of pages")

    @classmethod
    def from_page(cls, page: LoginAttemptPage) -> "LoginAttemptListResponse":
        return cls(
            items=[LoginAttemptResponse.from_entity(item) for item in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )


class LoginAttemptPurgeResponse(CamelModel):
    """Result of a purge."""

    deleted: int = Field(..., description="Number of rows removed")
