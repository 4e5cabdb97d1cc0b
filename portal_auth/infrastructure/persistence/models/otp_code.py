"""One-time code database model."""

from datetime import datetime

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseModel, UtcDateTime


class OtpCodeModel(BaseModel):
    """Single-use numeric code bound to (email, purpose).

    Fields:
        email: Recipient the code was sent to
        purpose: What the code unlocks (``login``)
        code: 6-digit numeric code
        expires_at: Absolute expiry (5 minutes after issue)
        is_used: Set when consumed or superseded by a newer code
    """

    __tablename__ = "otp_codes"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    purpose: Mapped[str] = mapped_column(String(50), nullable=False)
    code: Mapped[str] = mapped_column(String(6), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_otp_codes_email_purpose_used", "email", "purpose", "is_used"),
    )
