"""Relational implementation of AuditProtocol.

Append-only audit trail for authentication events:
- Async SQLAlchemy on a session dedicated to auditing
- Result types instead of exceptions
- JSON (JSONB on PostgreSQL) context column

Immutability:
    Only INSERT is issued here. On PostgreSQL the migration installs rules
    that discard UPDATE and DELETE on ``audit_logs``.

Usage:
    adapter = PostgresAuditAdapter(session)

    result = await adapter.record(
        action=AuditAction.LOGIN_ATTEMPT,
        status=AuditStatus.SUCCESS,
        reason=FailureReason.AUTHENTICATED,
        identity="alice",
        account_id=7,
        ip_address="203.0.113.9",
    )
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.core.enums import ErrorCode
from portal_auth.core.result import Failure, Result, Success
from portal_auth.domain.enums import AuditAction, AuditStatus
from portal_auth.domain.errors import AuditError
from portal_auth.infrastructure.persistence.models import AuditLogModel


class PostgresAuditAdapter:
    """Audit sink writing to ``audit_logs``.

    Attributes:
        session: Session used only for audit writes. The container hands
            out a separate session so an audit commit or rollback never
            touches the request's own unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize adapter with its audit session.

        Args:
            session: SQLAlchemy async session (injected by container).
        """
        self.session = session

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
        """Append one audit entry and commit it.

        Args:
            action: What happened.
            status: Outcome.
            reason: Machine-readable reason.
            identity: Identifier supplied by the client.
            account_id: Resolved account.
            tenant_id: Request or account tenant.
            ip_address: Source address.
            user_agent: Client user agent.
            context: Extra JSON details.

        Returns:
            Result[None, AuditError]:
                - Success(None) if the entry was committed
                - Failure(AuditError) otherwise; never raises
        """
        try:
            self.session.add(
                AuditLogModel(
                    action=action.value,
                    status=status.value,
                    reason=reason,
                    identity=identity[:255] if identity else None,
                    account_id=account_id,
                    tenant_id=tenant_id,
                    ip_address=ip_address,
                    user_agent=user_agent[:500] if user_agent else None,
                    context=context,
                )
            )
            await self.session.commit()
            return Success(value=None)

        except SQLAlchemyError as e:
            await self.session.rollback()
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Failed to record audit log: {e}",
                    details={
                        "action": action.value,
                        "error_type": type(e).__name__,
                    },
                )
            )
        except Exception as e:
            # Unexpected error (serialization of context, driver bug)
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Unexpected error recording audit log: {e}",
                    details={
                        "action": action.value,
                        "error_type": type(e).__name__,
                    },
                )
            )
