"""Integration tests for the SQLAlchemy repositories.

Architecture:
- Real database engine (in-memory SQLite via aiosqlite, fresh per test)
- Tests actual statements, including the atomic UPDATE ... RETURNING paths

Tests cover:
- AccountRepository: lookups, soft delete, failure counter and lockout tiers
- LoginAttemptRepository: window counting, paging, search, delete, purge
- OtpCodeRepository: supersession, single use, expiry, purpose isolation
- RefreshTokenRepository: consume once, expiry, revoke
- PermissionRepository: tenant scoping and platform (NULL) roles
- TenantRepository: slug and custom domain lookups
- PostgresAuditAdapter: append and failure as value
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError

from portal_auth.core.result import Failure, Success
from portal_auth.domain.enums import AuditAction, AuditStatus
from portal_auth.infrastructure.audit.postgres_adapter import PostgresAuditAdapter
from portal_auth.infrastructure.persistence.models import (
    AccountModel,
    AuditLogModel,
    OtpCodeModel,
    PermissionModel,
    RoleModel,
    TenantModel,
    account_roles,
    role_permissions,
)
from portal_auth.infrastructure.persistence.repositories import (
    AccountRepository,
    LoginAttemptRepository,
    OtpCodeRepository,
    PermissionRepository,
    RefreshTokenRepository,
    TenantRepository,
)

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=UTC)


# =============================================================================
# AccountRepository
# =============================================================================


@pytest.mark.integration
class TestAccountRepository:
    """Integration tests for AccountRepository."""

    async def test_find_by_username_or_email(self, db_session, seed_account):
        model = await seed_account(username="Alice", email="Alice@Example.com")
        repo = AccountRepository(db_session)

        by_name = await repo.find_by_username_or_email("alice")
        by_email = await repo.find_by_username_or_email(" alice@example.COM ")

        assert by_name is not None and by_name.id == model.id
        assert by_email is not None and by_email.id == model.id
        assert by_name.locked_until is None

    async def test_soft_deleted_account_is_invisible(self, db_session, seed_account):
        model = await seed_account(username="gone", deleted_at=NOW)
        repo = AccountRepository(db_session)

        assert await repo.find_by_username_or_email("gone") is None
        assert await repo.find_by_id(model.id) is None

    async def test_unknown_identifier(self, db_session):
        assert await AccountRepository(db_session).find_by_username_or_email("x") is None

    async def test_failures_apply_lockout_tiers(self, db_session, seed_account):
        model = await seed_account()
        repo = AccountRepository(db_session)

        states = [await repo.record_failed_login(model.id, now=NOW) for _ in range(20)]

        assert [s.failed_login_attempts for s in states] == list(range(1, 21))
        assert all(s.locked_until is None for s in states[:4])
        assert states[4].locked_until == NOW + timedelta(minutes=15)
        assert states[9].locked_until == NOW + timedelta(hours=1)
        assert states[19].locked_until == NOW + timedelta(hours=24)

        account = await repo.find_by_id(model.id)
        assert account.failed_login_attempts == 20
        assert account.locked_until == NOW + timedelta(hours=24)
        assert account.last_failed_login_at == NOW

    async def test_failure_for_missing_account(self, db_session):
        assert await AccountRepository(db_session).record_failed_login(999, now=NOW) is None

    async def test_success_resets_counter_and_lock(self, db_session, seed_account):
        model = await seed_account(
            failed_login_attempts=7, locked_until=NOW + timedelta(minutes=5)
        )
        repo = AccountRepository(db_session)

        await repo.record_successful_login(model.id, now=NOW)

        account = await repo.find_by_id(model.id)
        assert account.failed_login_attempts == 0
        assert account.locked_until is None
        assert account.last_login_at == NOW


# =============================================================================
# LoginAttemptRepository
# =============================================================================


@pytest.mark.integration
class TestLoginAttemptRepository:
    """Integration tests for LoginAttemptRepository."""

    async def add(self, repo, ip="10.0.0.1", *, at=NOW, identifier="alice", agent="ua"):
        await repo.add(
            ip_address=ip, identifier=identifier, user_agent=agent, attempted_at=at
        )

    async def test_count_since_is_per_ip_and_window(self, db_session):
        repo = LoginAttemptRepository(db_session)
        await self.add(repo, at=NOW - timedelta(seconds=61))
        await self.add(repo, at=NOW - timedelta(seconds=30))
        await self.add(repo, at=NOW)
        await self.add(repo, "10.0.0.2", at=NOW)

        count = await repo.count_since("10.0.0.1", NOW - timedelta(seconds=60))

        assert count == 2

    async def test_list_page_newest_first(self, db_session):
        repo = LoginAttemptRepository(db_session)
        for minutes in range(5):
            await self.add(repo, at=NOW - timedelta(minutes=minutes))

        items, total = await repo.list_page(page=1, page_size=2)
        second, _ = await repo.list_page(page=2, page_size=2)

        assert total == 5
        assert [item.attempted_at for item in items] == [NOW, NOW - timedelta(minutes=1)]
        assert second[0].attempted_at == NOW - timedelta(minutes=2)

    async def test_search(self, db_session):
        repo = LoginAttemptRepository(db_session)
        await self.add(repo, "192.168.1.5", identifier="bob")
        await self.add(repo, "10.0.0.1", identifier="Alice@example.com")
        await self.add(repo, "10.0.0.2", identifier="carol", agent="curl/8.0")

        by_ip, ip_total = await repo.list_page(page=1, page_size=10, search="192.168")
        by_name, _ = await repo.list_page(page=1, page_size=10, search="alice")
        by_agent, _ = await repo.list_page(page=1, page_size=10, search="CURL")

        assert ip_total == 1 and by_ip[0].identifier == "bob"
        assert by_name[0].ip_address == "10.0.0.1"
        assert by_agent[0].identifier == "carol"

    async def test_delete(self, db_session):
        repo = LoginAttemptRepository(db_session)
        await self.add(repo)
        items, _ = await repo.list_page(page=1, page_size=1)

        assert await repo.delete(items[0].id) is True
        assert await repo.delete(items[0].id) is False

    async def test_purge_older_than(self, db_session):
        repo = LoginAttemptRepository(db_session)
        await self.add(repo, at=NOW - timedelta(hours=2))
        await self.add(repo, at=NOW - timedelta(minutes=5))

        deleted = await repo.purge(older_than=NOW - timedelta(hours=1))

        assert deleted == 1
        assert (await repo.list_page(page=1, page_size=10))[1] == 1

    async def test_purge_all_resets_throttle(self, db_session):
        repo = LoginAttemptRepository(db_session)
        for _ in range(3):
            await self.add(repo)

        assert await repo.purge() == 3
        assert await repo.count_since("10.0.0.1", NOW - timedelta(minutes=1)) == 0

    async def test_long_values_are_truncated(self, db_session):
        repo = LoginAttemptRepository(db_session)
        await self.add(repo, identifier="i" * 400, agent="a" * 900)

        items, _ = await repo.list_page(page=1, page_size=1)

        assert len(items[0].identifier) == 255
        assert len(items[0].user_agent) == 500


# =============================================================================
# OtpCodeRepository
# =============================================================================


@pytest.mark.integration
class TestOtpCodeRepository:
    """Integration tests for OtpCodeRepository."""

    async def issue(self, repo, code, *, purpose="login", expires_at=None):
        return await repo.replace_unused(
            email="alice@example.com",
            purpose=purpose,
            code=code,
            expires_at=expires_at or NOW + timedelta(minutes=5),
        )

    async def consume(self, repo, code, *, purpose="login", now=NOW):
        return await repo.consume(
            email="alice@example.com", code=code, purpose=purpose, now=now
        )

    async def test_code_is_single_use(self, db_session):
        repo = OtpCodeRepository(db_session)
        await self.issue(repo, "123456")

        assert await self.consume(repo, "123456") is True
        assert await self.consume(repo, "123456") is False

    async def test_new_code_supersedes_old(self, db_session):
        repo = OtpCodeRepository(db_session)
        await self.issue(repo, "111111")

        superseded = await self.issue(repo, "222222")

        assert superseded == 1
        assert await self.consume(repo, "111111") is False
        assert await self.consume(repo, "222222") is True

    async def test_at_most_one_unused_code_per_pair(self, db_session):
        repo = OtpCodeRepository(db_session)
        for code in ("111111", "222222", "333333"):
            await self.issue(repo, code)

        unused = await db_session.execute(
            select(func.count())
            .select_from(OtpCodeModel)
            .where(OtpCodeModel.is_used.is_(False))
        )
        assert unused.scalar_one() == 1

    async def test_expired_code(self, db_session):
        repo = OtpCodeRepository(db_session)
        await self.issue(repo, "123456", expires_at=NOW + timedelta(minutes=5))

        assert await self.consume(repo, "123456", now=NOW + timedelta(minutes=5)) is False

    async def test_purpose_isolation(self, db_session):
        repo = OtpCodeRepository(db_session)
        await self.issue(repo, "123456", purpose="login")

        assert await self.consume(repo, "123456", purpose="password_reset") is False
        assert await self.consume(repo, "123456", purpose="login") is True


# =============================================================================
# RefreshTokenRepository
# =============================================================================


@pytest.mark.integration
class TestRefreshTokenRepository:
    """Integration tests for RefreshTokenRepository."""

    async def test_consume_once(self, db_session, seed_account):
        account = await seed_account()
        repo = RefreshTokenRepository(db_session)
        await repo.add(
            account_id=account.id, token_hash="d1", expires_at=NOW + timedelta(days=7)
        )

        assert await repo.consume("d1", now=NOW, reason="rotated") == account.id
        assert await repo.consume("d1", now=NOW, reason="rotated") is None

        stored = await repo.find_by_hash("d1")
        assert stored.revoked is True
        assert stored.revoked_reason == "rotated"
        assert stored.revoked_at == NOW

    async def test_expired_token_not_consumed(self, db_session, seed_account):
        account = await seed_account()
        repo = RefreshTokenRepository(db_session)
        await repo.add(account_id=account.id, token_hash="d1", expires_at=NOW)

        assert await repo.consume("d1", now=NOW, reason="rotated") is None
        assert (await repo.find_by_hash("d1")).revoked is False

    async def test_revoke(self, db_session, seed_account):
        account = await seed_account()
        repo = RefreshTokenRepository(db_session)
        await repo.add(
            account_id=account.id, token_hash="d1", expires_at=NOW + timedelta(days=7)
        )

        assert await repo.revoke("d1", now=NOW, reason="logged_out") is True
        assert await repo.revoke("d1", now=NOW, reason="logged_out") is False
        assert await repo.revoke("unknown", now=NOW, reason="logged_out") is False


# =============================================================================
# PermissionRepository and TenantRepository
# =============================================================================


async def create_tenant(session, slug, *, domain=None, is_active=True) -> int:
    tenant = TenantModel(slug=slug, domain=domain, name=slug.title(), is_active=is_active)
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)
    return tenant.id


async def create_role(session, name, tenant_id, permissions) -> int:
    role = RoleModel(name=name, tenant_id=tenant_id)
    session.add(role)
    await session.flush()
    for permission_name in permissions:
        permission_id = (
            await session.execute(
                select(PermissionModel.id).where(PermissionModel.name == permission_name)
            )
        ).scalar_one_or_none()
        if permission_id is None:
            permission = PermissionModel(name=permission_name)
            session.add(permission)
            await session.flush()
            permission_id = permission.id
        await session.execute(
            insert(role_permissions).values(role_id=role.id, permission_id=permission_id)
        )
    await session.commit()
    return role.id


async def assign_role(session, account_id, role_id) -> None:
    await session.execute(insert(account_roles).values(account_id=account_id, role_id=role_id))
    await session.commit()


@pytest.mark.integration
class TestPermissionRepository:
    """Integration tests for role/permission resolution."""

    async def test_no_roles(self, db_session, seed_account):
        account = await seed_account()

        grants = await PermissionRepository(db_session).resolve(account.id, None)

        assert grants.roles == ()
        assert grants.permissions == ()

    async def test_platform_account_gets_platform_roles(self, db_session, seed_account):
        account = await seed_account()
        role_id = await create_role(db_session, "administrator", None, ["manage_all"])
        await assign_role(db_session, account.id, role_id)

        grants = await PermissionRepository(db_session).resolve(account.id, None)

        assert grants.roles == ("administrator",)
        assert grants.permissions == ("manage_all",)

    async def test_only_own_tenant_roles_count(self, db_session, seed_account):
        finance = await create_tenant(db_session, "finance")
        hr = await create_tenant(db_session, "hr")
        account = await seed_account(tenant_id=finance)
        editor = await create_role(
            db_session, "editor", finance, ["news.publish", "news.edit"]
        )
        reviewer = await create_role(db_session, "reviewer", finance, ["news.edit"])
        foreign = await create_role(db_session, "admin", hr, ["manage_all"])
        platform = await create_role(db_session, "root", None, ["manage_all"])
        for role_id in (editor, reviewer, foreign, platform):
            await assign_role(db_session, account.id, role_id)

        grants = await PermissionRepository(db_session).resolve(account.id, finance)

        assert grants.roles == ("editor", "reviewer")
        assert grants.permissions == ("news.edit", "news.publish")


@pytest.mark.integration
class TestTenantRepository:
    """Integration tests for tenant lookup."""

    async def test_slug_lookup(self, db_session):
        tenant_id = await create_tenant(db_session, "finance")

        found = await TenantRepository(db_session).find_active_id(
            slug="FINANCE", domain="finance.portal.example"
        )

        assert found == tenant_id

    async def test_custom_domain_wins(self, db_session):
        await create_tenant(db_session, "portal")
        custom = await create_tenant(db_session, "acme", domain="portal.acme.example")

        found = await TenantRepository(db_session).find_active_id(
            slug="portal", domain="portal.acme.example"
        )

        assert found == custom

    async def test_inactive_tenant_not_resolved(self, db_session):
        await create_tenant(db_session, "closed", is_active=False)

        assert (
            await TenantRepository(db_session).find_active_id(slug="closed", domain="x")
            is None
        )


# =============================================================================
# PostgresAuditAdapter
# =============================================================================


@pytest.mark.integration
class TestAuditAdapter:
    """Integration tests for the audit sink."""

    async def test_record_appends_row(self, db_session):
        adapter = PostgresAuditAdapter(db_session)

        result = await adapter.record(
            action=AuditAction.LOGIN_ATTEMPT,
            status=AuditStatus.FAILED,
            reason="invalid_password",
            identity="alice",
            account_id=7,
            ip_address="203.0.113.9",
            context={"failed_login_attempts": 2},
        )

        assert result == Success(value=None)
        row = (await db_session.execute(select(AuditLogModel))).scalar_one()
        assert row.action == "login_attempt"
        assert row.status == "failed"
        assert row.context == {"failed_login_attempts": 2}

    async def test_store_failure_is_returned(self, test_database):
        async with test_database.async_session() as session:
            await test_database.drop_all()
            adapter = PostgresAuditAdapter(session)

            result = await adapter.record(
                action=AuditAction.LOGOUT, status=AuditStatus.SUCCESS
            )

        assert isinstance(result, Failure)
        assert result.error.code.value == "audit_record_failed"
        await test_database.create_all()


@pytest.mark.integration
class TestAccountModelConstraints:
    """Schema-level guarantees."""

    async def test_failed_counter_cannot_go_negative(self, db_session, seed_account):
        with pytest.raises(IntegrityError):
            await seed_account(failed_login_attempts=-1)
        await db_session.rollback()

        count = (
            await db_session.execute(select(func.count()).select_from(AccountModel))
        ).scalar_one()
        assert count == 0
