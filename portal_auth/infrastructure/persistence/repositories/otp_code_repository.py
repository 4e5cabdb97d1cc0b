"""OtpCodeRepository - storage of single-use login codes."""

from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.infrastructure.persistence.models import OtpCodeModel


class OtpCodeRepository:
    """SQLAlchemy implementation of the OtpCodeRepository protocol.

    Consumption is a single conditional ``UPDATE ... RETURNING``. Two
    concurrent verifications of one code serialize on the row lock and the
    loser finds ``is_used`` already set, so at most one of them succeeds.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def replace_unused(
        self,
        *,
        email: str,
        purpose: str,
        code: str,
        expires_at: datetime,
    ) -> int:
        """Supersede unused codes of (email, purpose) and insert a new one.

        Args:
            email: Recipient address.
            purpose: Code purpose.
            code: New 6-digit code.
            expires_at: Expiry of the new code.

        Returns:
            Number of superseded codes.
        """
        invalidate = (
            update(OtpCodeModel)
            .where(
                OtpCodeModel.email == email,
                OtpCodeModel.purpose == purpose,
                OtpCodeModel.is_used.is_(False),
            )
            .values(is_used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(invalidate)
        superseded = int(result.rowcount)  # type: ignore[attr-defined]

        self.session.add(
            OtpCodeModel(
                email=email,
                purpose=purpose,
                code=code,
                expires_at=expires_at,
                is_used=False,
            )
        )
        await self.session.commit()
        return superseded

    async def consume(
        self,
        *,
        email: str,
        code: str,
        purpose: str,
        now: datetime,
    ) -> bool:
        """Mark a matching, unused, unexpired code as used.

        Returns:
            True when this call consumed a code.
        """
        stmt = (
            update(OtpCodeModel)
            .where(
                OtpCodeModel.email == email,
                OtpCodeModel.code == code,
                OtpCodeModel.purpose == purpose,
                OtpCodeModel.is_used.is_(False),
                OtpCodeModel.expires_at > now,
            )
            .values(is_used=True)
            .returning(OtpCodeModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        consumed = result.scalars().all()
        await self.session.commit()
        return len(consumed) > 0
