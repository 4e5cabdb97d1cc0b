"""Platform role and permission seeder.

Seeds the ``manage_all`` permission and the platform-level (tenant NULL)
``administrator`` role holding it. Tenant roles and account assignments
are managed by user administration, not by migrations.
"""

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)

PLATFORM_PERMISSIONS: tuple[str, ...] = ("manage_all",)

# role name -> permissions granted
PLATFORM_ROLES: dict[str, tuple[str, ...]] = {
    "administrator": ("manage_all",),
}


async def _ensure_permission(session: AsyncSession, name: str) -> tuple[int, bool]:
    result = await session.execute(
        text("SELECT id FROM permissions WHERE name = :name"), {"name": name}
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        return existing, False

    await session.execute(
        text("INSERT INTO permissions (name) VALUES (:name)"), {"name": name}
    )
    result = await session.execute(
        text("SELECT id FROM permissions WHERE name = :name"), {"name": name}
    )
    return result.scalar_one(), True


async def _ensure_platform_role(session: AsyncSession, name: str) -> tuple[int, bool]:
    # Platform roles have tenant_id NULL; a unique constraint does not
    # cover NULLs, so existence is checked explicitly
    query = text("SELECT id FROM roles WHERE tenant_id IS NULL AND name = :name")
    result = await session.execute(query, {"name": name})
    existing = result.scalar_one_or_none()
    if existing is not None:
        return existing, False

    await session.execute(
        text("INSERT INTO roles (tenant_id, name) VALUES (NULL, :name)"),
        {"name": name},
    )
    result = await session.execute(query, {"name": name})
    return result.scalar_one(), True


async def seed_platform_roles(session: AsyncSession) -> None:
    """Seed platform permissions and roles. Idempotent.

    Args:
        session: Async database session.
    """
    seeded_count = 0
    skipped_count = 0

    permission_ids: dict[str, int] = {}
    for name in PLATFORM_PERMISSIONS:
        permission_ids[name], created = await _ensure_permission(session, name)
        seeded_count += created
        skipped_count += not created

    for role_name, granted in PLATFORM_ROLES.items():
        role_id, created = await _ensure_platform_role(session, role_name)
        seeded_count += created
        skipped_count += not created

        for permission in granted:
            params = {"role_id": role_id, "permission_id": permission_ids[permission]}
            result = await session.execute(
                text(
                    "SELECT 1 FROM role_permissions "
                    "WHERE role_id = :role_id AND permission_id = :permission_id"
                ),
                params,
            )
            if result.first() is not None:
                skipped_count += 1
                continue
            await session.execute(
                text(
                    "INSERT INTO role_permissions (role_id, permission_id) "
                    "VALUES (:role_id, :permission_id)"
                ),
                params,
            )
            seeded_count += 1

    logger.info(
        "rbac_seeding_complete",
        seeded=seeded_count,
        skipped=skipped_count,
    )
