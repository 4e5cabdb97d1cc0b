"""Refresh token database model.

Security:
    - token_hash: SHA-256 digest of the opaque token (never plaintext)
    - revoked / revoked_at / revoked_reason: server-side invalidation
"""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseModel, IdType, UtcDateTime


class RefreshTokenModel(BaseModel):
    """Opaque, revocable credential used to renew access tokens.

    Usable only while ``revoked`` is false and ``expires_at`` lies in the
    future. Renewal revokes the presented row (reason ``rotated``) and
    inserts a new one.
    """

    __tablename__ = "refresh_tokens"

    account_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False, index=True)
    revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UtcDateTime, nullable=True)
    revoked_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
