"""PermissionRepository - read path into the role/permission store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.domain.entities import AccessGrants
from portal_auth.infrastructure.persistence.models import (
    PermissionModel,
    RoleModel,
    account_roles,
    role_permissions,
)


class PermissionRepository:
    """SQLAlchemy implementation of PermissionResolverProtocol.

    Only roles of the account's own tenant count. For a platform account
    (tenant None) that means platform roles, i.e. ``roles.tenant_id IS
    NULL``; a plain equality would never match NULL.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def resolve(self, account_id: int, tenant_id: int | None) -> AccessGrants:
        """Return role and permission names held by the account.

        Args:
            account_id: Account being issued a token.
            tenant_id: Tenant of the account.

        Returns:
            AccessGrants with sorted, de-duplicated names.
        """
        tenant_clause = (
            RoleModel.tenant_id.is_(None)
            if tenant_id is None
            else RoleModel.tenant_id == tenant_id
        )
        role_stmt = (
            select(RoleModel.id, RoleModel.name)
            .join(account_roles, account_roles.c.role_id == RoleModel.id)
            .where(account_roles.c.account_id == account_id, tenant_clause)
        )
        role_rows = (await self.session.execute(role_stmt)).all()
        if not role_rows:
            return AccessGrants()

        role_ids = [row.id for row in role_rows]
        permission_stmt = (
            select(PermissionModel.name)
            .join(role_permissions, role_permissions.c.permission_id == PermissionModel.id)
            .where(role_permissions.c.role_id.in_(role_ids))
            .distinct()
        )
        permission_names = (await self.session.execute(permission_stmt)).scalars().all()

        return AccessGrants(
            roles=tuple(sorted({row.name for row in role_rows})),
            permissions=tuple(sorted(set(permission_names))),
        )
