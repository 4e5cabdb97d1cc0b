"""Permission resolver protocol (port).

The role/permission store is owned by user management. The authentication
core only reads from it at token mint time.
"""

from typing import Protocol

from portal_auth.domain.entities import AccessGrants


class PermissionResolverProtocol(Protocol):
    """Read path into the permission/role store."""

    async def resolve(self, account_id: int, tenant_id: int | None) -> AccessGrants:
        """Return the roles and permissions an account holds in its tenant.

        Args:
            account_id: Account being issued a token.
            tenant_id: Tenant of the account (None for platform roles).
        """
        ...
