"""Pytest configuration.

Environment variables are set before any ``portal_auth`` import, because
``portal_auth.core.config`` builds the settings singleton at import time.

Fixtures:
- test_database: fresh in-memory SQLite database per test (aiosqlite)
- db_session: session on that database
- password_service: bcrypt at the minimum cost factor
- seed_account: helper inserting AccountModel rows
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from portal_auth.infrastructure.persistence.database import Database  # noqa: E402
from portal_auth.infrastructure.persistence.models import AccountModel  # noqa: E402
from portal_auth.infrastructure.security import BcryptPasswordService  # noqa: E402

TEST_PASSWORD = "correct horse battery staple"

SeedAccount = Callable[..., Awaitable[AccountModel]]


@pytest.fixture(scope="session")
def password_service() -> BcryptPasswordService:
    """bcrypt service at cost 10 (the lowest accepted)."""
    return BcryptPasswordService(cost_factor=10)


@pytest.fixture(scope="session")
def test_password_hash(password_service: BcryptPasswordService) -> str:
    """Hash of TEST_PASSWORD, computed once per session."""
    return password_service.hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def test_database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with all tables created."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.close()


@pytest_asyncio.fixture
async def db_session(test_database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session on the test database."""
    async with test_database.async_session() as session:
        yield session


@pytest_asyncio.fixture
async def seed_account(
    db_session: AsyncSession, test_password_hash: str
) -> SeedAccount:
    """Return a coroutine function inserting an account.

    Usage:
        account = await seed_account(username="alice", otp_enabled=True)
    """
    counter = 0

    async def _seed(
        *,
        username: str | None = None,
        email: str | None = None,
        tenant_id: int | None = None,
        is_active: bool = True,
        otp_enabled: bool = False,
        failed_login_attempts: int = 0,
        locked_until: datetime | None = None,
        deleted_at: datetime | None = None,
        password_hash: str | None = None,
    ) -> AccountModel:
        nonlocal counter
        counter += 1
        username = username or f"user{counter}"
        model = AccountModel(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=password_hash or test_password_hash,
            tenant_id=tenant_id,
            is_active=is_active,
            otp_enabled=otp_enabled,
            failed_login_attempts=failed_login_attempts,
            locked_until=locked_until,
            deleted_at=deleted_at,
        )
        db_session.add(model)
        await db_session.commit()
        await db_session.refresh(model)
        return model

    return _seed


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against a real database engine"
    )
    config.addinivalue_line("markers", "api: API endpoint tests through the ASGI app")
