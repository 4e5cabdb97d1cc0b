"""Tenant resolver protocol (port)."""

from typing import Protocol


class TenantResolverProtocol(Protocol):
    """Derive the tenant a request is addressed to."""

    async def resolve(self, host: str | None) -> int | None:
        """Map a request host to an active tenant id.

        Args:
            host: Value of X-Forwarded-Host or Host, port included or not.

        Returns:
            Tenant id, or None when the host names no tenant.
        """
        ...
