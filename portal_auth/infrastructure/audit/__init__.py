"""Audit sink adapters."""

from portal_auth.infrastructure.audit.postgres_adapter import PostgresAuditAdapter

__all__ = ["PostgresAuditAdapter"]
