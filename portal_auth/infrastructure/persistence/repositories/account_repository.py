"""AccountRepository - SQLAlchemy implementation of the credential store.

Adapter for hexagonal architecture. Maps between domain Account entities and
AccountModel rows and implements the two login bookkeeping writes.
"""

from datetime import datetime

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.domain.entities import Account
from portal_auth.domain.policies import next_lockout
from portal_auth.domain.protocols import LockoutState
from portal_auth.infrastructure.persistence.models import AccountModel


class AccountRepository:
    """SQLAlchemy implementation of the AccountRepository protocol.

    Does NOT inherit from the protocol (structural typing).

    Lookups refresh rows already in the session, since the bookkeeping
    writes are bulk UPDATEs that bypass the identity map.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = AccountRepository(session)
        ...     account = await repo.find_by_username_or_email("alice")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_username_or_email(self, identifier: str) -> Account | None:
        """Find a live account by username or email.

        Both columns are compared case-insensitively. Soft-deleted accounts
        are excluded.

        Args:
            identifier: Username or email as typed by the user.

        Returns:
            Domain Account if found, None otherwise.
        """
        needle = identifier.strip().lower()
        stmt = (
            select(AccountModel)
            .where(
                or_(
                    func.lower(AccountModel.username) == needle,
                    func.lower(AccountModel.email) == needle,
                ),
                AccountModel.deleted_at.is_(None),
            )
            .order_by(AccountModel.id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_id(self, account_id: int) -> Account | None:
        """Find a live account by id.

        Args:
            account_id: Account identifier.

        Returns:
            Domain Account if found, None otherwise.
        """
        stmt = (
            select(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.deleted_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def record_failed_login(
        self, account_id: int, *, now: datetime
    ) -> LockoutState | None:
        """Increment the failure counter and apply the lockout tiers.

        The increment is a single ``UPDATE ... RETURNING`` so concurrent
        failures each observe a distinct count. The lockout write is guarded
        on that count: if another failure has already moved the counter on,
        its own (later) lockout wins.

        Args:
            account_id: Account that failed to authenticate.
            now: Failure time.

        Returns:
            LockoutState with the new count, or None if no live account
            matched.
        """
        increment = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.deleted_at.is_(None),
            )
            .values(
                failed_login_attempts=AccountModel.failed_login_attempts + 1,
                last_failed_login_at=now,
            )
            .returning(AccountModel.failed_login_attempts)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(increment)
        failed_count = result.scalar_one_or_none()

        if failed_count is None:
            await self.session.rollback()
            return None

        lockout = next_lockout(failed_count)
        locked_until = now + lockout if lockout is not None else None

        apply_lockout = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.failed_login_attempts == failed_count,
            )
            .values(locked_until=locked_until)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(apply_lockout)
        await self.session.commit()

        return LockoutState(
            failed_login_attempts=failed_count,
            locked_until=locked_until,
        )

    async def record_successful_login(self, account_id: int, *, now: datetime) -> None:
        """Reset counter and lockout together and stamp the last login.

        Args:
            account_id: Account that authenticated.
            now: Login time.
        """
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                failed_login_attempts=0,
                locked_until=None,
                last_login_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    def _to_domain(self, model: AccountModel) -> Account:
        """Convert database model to domain entity."""
        return Account(
            id=model.id,
            tenant_id=model.tenant_id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            is_active=model.is_active,
            otp_enabled=model.otp_enabled,
            failed_login_attempts=model.failed_login_attempts,
            locked_until=model.locked_until,
            last_failed_login_at=model.last_failed_login_at,
            last_login_at=model.last_login_at,
        )
