"""RefreshTokenRepository - persistence of opaque refresh tokens.

Only SHA-256 digests are stored. Renewal consumes a token with one
conditional update, so a token replayed concurrently renews at most once.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.domain.protocols import RefreshTokenData
from portal_auth.infrastructure.persistence.models import RefreshTokenModel


def _to_data(model: RefreshTokenModel) -> RefreshTokenData:
    """Convert database model to domain DTO."""
    return RefreshTokenData(
        id=model.id,
        account_id=model.account_id,
        token_hash=model.token_hash,
        expires_at=model.expires_at,
        revoked=model.revoked,
        revoked_at=model.revoked_at,
        revoked_reason=model.revoked_reason,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation of the RefreshTokenRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     owner = await repo.consume(digest, now=now, reason="rotated")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, *, account_id: int, token_hash: str, expires_at: datetime) -> None:
        """Persist a new, unrevoked token.

        Args:
            account_id: Owning account.
            token_hash: SHA-256 hex digest of the opaque token.
            expires_at: Absolute expiry.
        """
        self.session.add(
            RefreshTokenModel(
                account_id=account_id,
                token_hash=token_hash,
                expires_at=expires_at,
                revoked=False,
            )
        )
        await self.session.commit()

    async def find_by_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Look up a token in any state."""
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model is not None else None

    async def consume(
        self, token_hash: str, *, now: datetime, reason: str
    ) -> int | None:
        """Revoke the token if it is still usable.

        Args:
            token_hash: Digest of the presented token.
            now: Reference time for the expiry check.
            reason: Stored as revoked_reason.

        Returns:
            Owning account id if this call revoked the token, else None.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_hash == token_hash,
                RefreshTokenModel.revoked.is_(False),
                RefreshTokenModel.expires_at > now,
            )
            .values(revoked=True, revoked_at=now, revoked_reason=reason)
            .returning(RefreshTokenModel.account_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        account_id = result.scalar_one_or_none()
        await self.session.commit()
        return account_id

    async def revoke(self, token_hash: str, *, now: datetime, reason: str) -> bool:
        """Revoke a token that is not revoked yet.

        Returns:
            True if the token changed state.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_hash == token_hash,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]
