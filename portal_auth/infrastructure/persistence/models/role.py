"""Role and permission models (owned by user management, read here).

Roles belong to a tenant (``tenant_id``) or to the platform (NULL).
Permissions are global names such as ``manage_all`` or ``news.publish``.
"""

from sqlalchemy import Column, ForeignKey, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from portal_auth.infrastructure.persistence.base import BaseModel, BaseMutableModel, IdType


account_roles = Table(
    "account_roles",
    BaseModel.metadata,
    Column("account_id", IdType, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", IdType, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = Table(
    "role_permissions",
    BaseModel.metadata,
    Column("role_id", IdType, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "permission_id",
        IdType,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class RoleModel(BaseMutableModel):
    """Named role inside a tenant (or platform-wide when tenant_id is NULL)."""

    __tablename__ = "roles"

    tenant_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_roles_tenant_name"),)


class PermissionModel(BaseModel):
    """Global permission name."""

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
