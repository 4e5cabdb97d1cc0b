"""Audit log database model (append-only).

Records cannot be modified. The migration adds PostgreSQL rules that turn
UPDATE and DELETE on ``audit_logs`` into no-ops.
"""

from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseModel, IdType


class AuditLogModel(BaseModel):
    """Audit trail entry for authentication events.

    Fields:
        action: What happened (login_attempt, token_refresh, ...)
        status: Outcome (success, failed, locked, otp_required)
        reason: Machine-readable reason (invalid_password, rate_limited, ...)
        identity: Identifier supplied by the client
        account_id: Resolved account (NULL when unknown)
        tenant_id: Tenant of the request or account
        ip_address: Source address
        user_agent: Client user agent
        context: Extra JSON details

    Indexes:
        - ix_audit_logs_account_action: (account_id, action)
        - ix_audit_logs_identity: (identity)
    """

    __tablename__ = "audit_logs"

    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str | None] = mapped_column(String(100), nullable=True)
    identity: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_id: Mapped[int | None] = mapped_column(
        IdType, nullable=True
    )
    tenant_id: Mapped[int | None] = mapped_column(
        IdType, nullable=True
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    context: Mapped[dict[str, Any] | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("ix_audit_logs_account_action", "account_id", "action"),
        Index("ix_audit_logs_identity", "identity"),
    )
