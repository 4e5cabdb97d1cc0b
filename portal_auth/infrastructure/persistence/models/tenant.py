"""Tenant database model.

Tenants are managed by the wider portal; the authentication core only
resolves a request host to an active tenant id.
"""

from datetime import datetime

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseMutableModel, UtcDateTime


class TenantModel(BaseMutableModel):
    """Tenant (organizational unit) addressed by subdomain or custom domain.

    Fields:
        slug: First host label that selects the tenant (``finance`` in
            ``finance.portal.example``).
        domain: Optional custom domain mapped to the tenant.
        name: Display name.
        is_active: Inactive tenants resolve to no tenant.
        deleted_at: Soft delete marker.
    """

    __tablename__ = "tenants"

    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    domain: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    deleted_at: Mapped[datetime | None] = mapped_column(UtcDateTime, nullable=True)
