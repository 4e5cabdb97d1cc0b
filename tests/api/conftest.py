"""API test fixtures.

The application services are replaced through ``app.dependency_overrides``;
routing, validation, cookies, token checks and error rendering are real.
The client talks HTTPS so Secure cookies round-trip.
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from portal_auth.core.container import (
    get_login_attempt_admin,
    get_session_facade,
    get_tenant_resolver,
    get_token_service,
)
from portal_auth.main import app


class StaticTenantResolver:
    """Tenant resolver returning a fixed tenant."""

    def __init__(self, tenant_id: int | None = None) -> None:
        self.tenant_id = tenant_id
        self.hosts: list[str | None] = []

    async def resolve(self, host: str | None) -> int | None:
        self.hosts.append(host)
        return self.tenant_id


@pytest.fixture
def facade() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def attempt_admin() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def tenant_resolver() -> StaticTenantResolver:
    return StaticTenantResolver()


@pytest.fixture
def client(facade, attempt_admin, tenant_resolver) -> Iterator[TestClient]:
    """TestClient with the service layer mocked out."""
    app.dependency_overrides[get_session_facade] = lambda: facade
    app.dependency_overrides[get_login_attempt_admin] = lambda: attempt_admin
    app.dependency_overrides[get_tenant_resolver] = lambda: tenant_resolver
    yield TestClient(app, base_url="https://testserver")
    app.dependency_overrides.clear()


def access_token(*, permissions: tuple[str, ...] = (), tenant_id: int | None = None, **kw):
    """Mint an access token with the application's own token service."""
    token, _ = get_token_service().generate_access_token(
        account_id=kw.get("account_id", 7),
        username=kw.get("username", "alice"),
        tenant_id=tenant_id,
        roles=kw.get("roles", ()),
        permissions=permissions,
        now=kw.get("now"),
    )
    return token


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
