"""Administrative access to the login attempt history.

Listing, single-row deletion and bulk purge of the rows the throttle is
computed from. Authorization (``manage_all``) is enforced by the caller.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from portal_auth.application.commands import RequestContext
from portal_auth.application.dtos import LoginAttemptPage
from portal_auth.core.enums import ErrorCode
from portal_auth.core.errors import NotFoundError
from portal_auth.core.result import Failure, Result, Success
from portal_auth.domain.entities import SessionClaims
from portal_auth.domain.enums import AuditAction, AuditStatus
from portal_auth.domain.protocols import (
    AuditProtocol,
    LoggerProtocol,
    LoginAttemptRepository,
)

MAX_PAGE_SIZE = 100


class LoginAttemptAdmin:
    """Login attempt maintenance operations."""

    def __init__(
        self,
        *,
        attempts: LoginAttemptRepository,
        audit: AuditProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._attempts = attempts
        self._audit = audit
        self._logger = logger

    async def list_attempts(
        self, *, page: int = 1, page_size: int = 20, search: str | None = None
    ) -> LoginAttemptPage:
        """Return one page of attempts, newest first.

        Args:
            page: 1-based page number (values below 1 are treated as 1).
            page_size: Rows per page, clamped to 1..100.
            search: Optional case-insensitive substring filter.
        """
        page = max(page, 1)
        page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
        search = search.strip() if search else None

        items, total = await self._attempts.list_page(
            page=page, page_size=page_size, search=search or None
        )
        return LoginAttemptPage(items=items, total=total, page=page, page_size=page_size)

    async def delete(
        self,
        attempt_id: int,
        *,
        claims: SessionClaims,
        context: RequestContext,
    ) -> Result[None, NotFoundError]:
        """Delete a single attempt row.

        Args:
            attempt_id: Row to delete.
            claims: Administrator performing the deletion.
            context: Request metadata for the audit entry.
        """
        if not await self._attempts.delete(attempt_id):
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.RESOURCE_NOT_FOUND,
                    message=f"Login attempt {attempt_id} not found",
                    resource_type="login_attempt",
                    resource_id=str(attempt_id),
                )
            )

        self._logger.info(
            "Login attempt deleted",
            attempt_id=attempt_id,
            account_id=claims.account_id,
        )
        await self._record(
            AuditAction.LOGIN_ATTEMPT_DELETED,
            claims,
            context,
            {"attempt_id": attempt_id},
        )
        return Success(value=None)

    async def purge(
        self,
        *,
        claims: SessionClaims,
        context: RequestContext,
        older_than_minutes: int | None = None,
    ) -> int:
        """Delete attempts, optionally only those older than a cutoff.

        Purging resets the throttle for every address whose rows are
        removed.

        Args:
            claims: Administrator performing the purge.
            context: Request metadata for the audit entry.
            older_than_minutes: Keep rows newer than this many minutes.

        Returns:
            Number of rows deleted.
        """
        older_than = None
        if older_than_minutes is not None:
            older_than = datetime.now(UTC) - timedelta(minutes=older_than_minutes)

        deleted = await self._attempts.purge(older_than=older_than)
        self._logger.info(
            "Login attempts purged",
            deleted=deleted,
            older_than_minutes=older_than_minutes,
            account_id=claims.account_id,
        )
        await self._record(
            AuditAction.LOGIN_ATTEMPTS_PURGED,
            claims,
            context,
            {"deleted": deleted, "older_than_minutes": older_than_minutes},
        )
        return deleted

    async def _record(
        self,
        action: AuditAction,
        claims: SessionClaims,
        context: RequestContext,
        details: dict[str, Any],
    ) -> None:
        result = await self._audit.record(
            action=action,
            status=AuditStatus.SUCCESS,
            identity=claims.username,
            account_id=claims.account_id,
            tenant_id=claims.tenant_id,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            context=details,
        )
        match result:
            case Success():
                pass
            case Failure(error=error):
                self._logger.warning(
                    "Audit record dropped",
                    action=action.value,
                    error_message=error.message,
                )
