"""Account database model.

Security:
    - password_hash: bcrypt hash, never plaintext
    - failed_login_attempts / locked_until: written only by the login
      bookkeeping (atomic increment on failure, reset on success)
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import (
    BaseMutableModel,
    IdType,
    UtcDateTime,
)


class AccountModel(BaseMutableModel):
    """Account that can authenticate, optionally scoped to a tenant.

    Fields:
        id: Numeric primary key (from BaseMutableModel)
        tenant_id: Owning tenant, NULL for platform accounts
        username: Unique login name
        email: Unique email address
        password_hash: bcrypt hash
        is_active: Deactivated accounts cannot log in
        otp_enabled: Require an emailed one-time code after the password
        failed_login_attempts: Consecutive failures
        locked_until: Lockout expiry
        last_failed_login_at: Last failure
        last_login_at: Last success
        deleted_at: Soft delete marker (hidden from the credential store)
    """

    __tablename__ = "accounts"

    tenant_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("tenants.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    otp_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    locked_until: Mapped[datetime | None] = mapped_column(UtcDateTime, nullable=True)
    last_failed_login_at: Mapped[datetime | None] = mapped_column(
        UtcDateTime, nullable=True
    )
    last_login_at: Mapped[datetime | None] = mapped_column(UtcDateTime, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(UtcDateTime, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "failed_login_attempts >= 0", name="ck_accounts_failed_login_attempts"
        ),
    )
