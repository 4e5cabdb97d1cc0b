"""Resolve the tenant a request is addressed to from its host name.

``finance.portal.example`` selects the tenant whose slug is ``finance``;
a tenant may also own a custom domain (``portal.finance.example``), which
is matched against the full host first.
"""

from portal_auth.infrastructure.persistence.repositories import TenantRepository


def split_host(host: str | None) -> tuple[str | None, str | None]:
    """Normalize a Host header value.

    Args:
        host: Raw header value, possibly with a port and/or several
            comma-separated proxies.

    Returns:
        Tuple of (full host name, first label), both lower-case, or
        (None, None) for empty input.

    Example:
        >>> split_host("Finance.Portal.Example:8443")
        ('finance.portal.example', 'finance')
    """
    if not host:
        return None, None

    name = host.split(",")[0].strip().lower()
    if name.startswith("["):
        # IPv6 literal, never a tenant
        return None, None
    name = name.rsplit(":", 1)[0] if ":" in name else name
    if not name:
        return None, None

    labels = name.split(".")
    slug = labels[0] if len(labels) > 1 else None
    return name, slug


class HostTenantResolver:
    """TenantResolverProtocol implementation backed by the tenants table."""

    def __init__(self, tenant_repository: TenantRepository) -> None:
        self._tenants = tenant_repository

    async def resolve(self, host: str | None) -> int | None:
        """Map a host to an active tenant id.

        Args:
            host: X-Forwarded-Host or Host header value.

        Returns:
            Tenant id, or None when the host names no active tenant.
        """
        domain, slug = split_host(host)
        if domain is None:
            return None
        return await self._tenants.find_active_id(slug=slug, domain=domain)
