"""TenantRepository - host-to-tenant lookups."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.infrastructure.persistence.models import TenantModel


class TenantRepository:
    """Read-only access to active tenants."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_active_id(self, *, slug: str | None, domain: str | None) -> int | None:
        """Find an active, non-deleted tenant by slug or custom domain.

        A custom domain match takes precedence over a slug match.

        Args:
            slug: Candidate slug (first host label).
            domain: Candidate custom domain (full host).

        Returns:
            Tenant id or None.
        """
        conditions = []
        if domain:
            conditions.append(func.lower(TenantModel.domain) == domain.lower())
        if slug:
            conditions.append(func.lower(TenantModel.slug) == slug.lower())
        if not conditions:
            return None

        stmt = select(TenantModel.id, TenantModel.domain).where(
            or_(*conditions),
            TenantModel.is_active.is_(True),
            TenantModel.deleted_at.is_(None),
        )
        rows = (await self.session.execute(stmt)).all()
        if not rows:
            return None

        if domain:
            for row in rows:
                if row.domain and row.domain.lower() == domain.lower():
                    return int(row.id)
        return int(rows[0].id)
