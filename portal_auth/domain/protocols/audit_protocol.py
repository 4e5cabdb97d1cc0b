"""Audit sink protocol (port).

Records who tried to authenticate, from where, and what happened.

Error Handling:
    ``record`` NEVER raises. Failures come back as Failure(AuditError) and
    callers inspect and drop them; an audit outage must not block login.

Usage:
    result = await audit.record(
        action=AuditAction.LOGIN_ATTEMPT,
        status=AuditStatus.FAILED,
        reason=FailureReason.INVALID_PASSWORD,
        identity="alice",
        account_id=7,
        ip_address="203.0.113.9",
        user_agent="Mozilla/5.0",
    )
"""

from typing import Any, Protocol

from portal_auth.core.result import Result
from portal_auth.domain.enums import AuditAction, AuditStatus
from portal_auth.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Protocol for the append-only audit trail.

    Implementations:
        - PostgresAuditAdapter: relational store, own session
    """

    async def record(
        self,
        *,
        action: AuditAction,
        status: AuditStatus,
        reason: str | None = None,
        identity: str | None = None,
        account_id: int | None = None,
        tenant_id: int | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> Result[None, AuditError]:
        """Append one audit entry.

        Args:
            action: What happened.
            status: Outcome of the action.
            reason: Machine-readable reason (see FailureReason).
            identity: Identifier the client supplied (username or email).
            account_id: Resolved account, if any.
            tenant_id: Tenant of the request or account.
            ip_address: Source address.
            user_agent: Client User-Agent.
            context: Extra JSON-serializable details. Never secrets.

        Returns:
            Success(None) or Failure(AuditError).
        """
        ...
