"""Tenant resolution adapters."""

from portal_auth.infrastructure.tenancy.host_tenant_resolver import HostTenantResolver

__all__ = ["HostTenantResolver"]
