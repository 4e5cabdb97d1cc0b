"""LoginAttemptRepository - append-only login attempt log.

Feeds the per-IP throttle and the administrative attempt listing.
"""

from datetime import datetime

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.domain.entities import LoginAttempt
from portal_auth.infrastructure.persistence.models import LoginAttemptModel


class LoginAttemptRepository:
    """SQLAlchemy implementation of the LoginAttemptRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(
        self,
        *,
        ip_address: str,
        identifier: str | None,
        user_agent: str | None,
        attempted_at: datetime,
    ) -> None:
        """Append one attempt and commit it at once.

        The row is committed before credentials are evaluated so that it
        counts even if the rest of the request fails or is cancelled.
        """
        self.session.add(
            LoginAttemptModel(
                ip_address=ip_address,
                identifier=identifier[:255] if identifier else None,
                user_agent=user_agent[:500] if user_agent else None,
                attempted_at=attempted_at,
            )
        )
        await self.session.commit()

    async def count_since(self, ip_address: str, since: datetime) -> int:
        """Count attempts from ip_address newer than since.

        Args:
            ip_address: Source address.
            since: Window start (exclusive).

        Returns:
            Number of attempts in the window.
        """
        stmt = (
            select(func.count())
            .select_from(LoginAttemptModel)
            .where(
                LoginAttemptModel.ip_address == ip_address,
                LoginAttemptModel.attempted_at > since,
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_page(
        self,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> tuple[list[LoginAttempt], int]:
        """Return one page of attempts, newest first, plus the total count.

        Args:
            page: 1-based page number.
            page_size: Rows per page.
            search: Case-insensitive substring over IP, identifier and
                user agent.

        Returns:
            Tuple of (attempts, total matching rows).
        """
        filters = self._search_filter(search)

        count_stmt = select(func.count()).select_from(LoginAttemptModel)
        page_stmt = select(LoginAttemptModel)
        if filters is not None:
            count_stmt = count_stmt.where(filters)
            page_stmt = page_stmt.where(filters)

        total = int((await self.session.execute(count_stmt)).scalar_one())

        page_stmt = (
            page_stmt.order_by(
                LoginAttemptModel.attempted_at.desc(),
                LoginAttemptModel.id.desc(),
            )
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(page_stmt)
        attempts = [self._to_domain(model) for model in result.scalars().all()]
        return attempts, total

    async def delete(self, attempt_id: int) -> bool:
        """Delete one attempt.

        Returns:
            True if a row was deleted.
        """
        stmt = delete(LoginAttemptModel).where(LoginAttemptModel.id == attempt_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def purge(self, *, older_than: datetime | None = None) -> int:
        """Delete attempts older than a cutoff, or every attempt.

        Args:
            older_than: Cutoff; None deletes the whole table.

        Returns:
            Number of deleted rows.
        """
        stmt = delete(LoginAttemptModel)
        if older_than is not None:
            stmt = stmt.where(LoginAttemptModel.attempted_at < older_than)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount)  # type: ignore[attr-defined]

    @staticmethod
    def _search_filter(search: str | None) -> ColumnElement[bool] | None:
        if not search or not search.strip():
            return None
        pattern = f"%{search.strip()}%"
        return or_(
            LoginAttemptModel.ip_address.ilike(pattern),
            LoginAttemptModel.identifier.ilike(pattern),
            LoginAttemptModel.user_agent.ilike(pattern),
        )

    @staticmethod
    def _to_domain(model: LoginAttemptModel) -> LoginAttempt:
        return LoginAttempt(
            id=model.id,
            ip_address=model.ip_address,
            identifier=model.identifier,
            user_agent=model.user_agent,
            attempted_at=model.attempted_at,
        )
