"""Login attempt database model (append-only)."""

from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseModel, UtcDateTime


class LoginAttemptModel(BaseModel):
    """One inbound login or OTP verification attempt.

    Rows are inserted before credentials are evaluated and never updated.

    Indexes:
        - ix_login_attempts_ip_attempted_at: (ip_address, attempted_at) for
          the trailing-window throttle count
    """

    __tablename__ = "login_attempts"

    ip_address: Mapped[str] = mapped_column(String(45), nullable=False)
    identifier: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    attempted_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False, index=True)

    __table_args__ = (
        Index("ix_login_attempts_ip_attempted_at", "ip_address", "attempted_at"),
    )
