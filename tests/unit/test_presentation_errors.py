"""Unit tests for the HTTP error surface.

Tests cover:
- ErrorCode to status/title mapping
- Problem Details rendering (code member, locked_until, instance)
- ApiProblem status selection
- TraceMiddleware trace id propagation
- Host parsing for tenant resolution
"""

import json
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from portal_auth.core.enums import ErrorCode
from portal_auth.infrastructure.tenancy.host_tenant_resolver import (
    HostTenantResolver,
    split_host,
)
from portal_auth.presentation.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)
from portal_auth.presentation.routers.api.v1.errors import (
    ApiProblem,
    ErrorResponseBuilder,
)


def mock_request(path: str = "/api/v1/auth/login") -> MagicMock:
    request = MagicMock()
    request.url.path = path
    return request


@pytest.mark.unit
class TestErrorResponseBuilder:
    """Test Problem Details responses built from error codes."""

    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.INVALID_CREDENTIALS, 401),
            (ErrorCode.ACCOUNT_LOCKED, 423),
            (ErrorCode.INVALID_OTP, 401),
            (ErrorCode.NO_REFRESH_TOKEN, 401),
            (ErrorCode.INVALID_REFRESH_TOKEN, 401),
            (ErrorCode.TOKEN_EXPIRED, 401),
            (ErrorCode.PERMISSION_DENIED, 403),
            (ErrorCode.RESOURCE_NOT_FOUND, 404),
            (ErrorCode.VALIDATION_FAILED, 422),
        ],
    )
    def test_status_mapping(self, code, status):
        assert ErrorResponseBuilder.status_for(code) == status

    def test_unmapped_code_is_server_error(self):
        assert ErrorResponseBuilder.status_for(ErrorCode.AUDIT_RECORD_FAILED) == 500

    def test_response_body(self):
        response = ErrorResponseBuilder.from_error_code(
            ErrorCode.INVALID_CREDENTIALS,
            mock_request(),
            detail="Invalid username or password",
        )

        body = json.loads(response.body)
        assert response.status_code == 401
        assert body["code"] == "invalid_credentials"
        assert body["title"] == "Invalid Credentials"
        assert body["type"].endswith("/errors/invalid_credentials")
        assert body["instance"] == "/api/v1/auth/login"
        assert "lockedUntil" not in body
        assert "locked_until" not in body

    def test_locked_until_member(self):
        response = ErrorResponseBuilder.from_error_code(
            ErrorCode.ACCOUNT_LOCKED,
            mock_request(),
            detail="locked",
            locked_until="2026-10-18T09:15:00+00:00",
        )

        body = json.loads(response.body)
        assert response.status_code == 423
        assert body["locked_until"] == "2026-10-18T09:15:00+00:00"

    def test_api_problem_status_follows_code(self):
        problem = ApiProblem(ErrorCode.PERMISSION_DENIED, "nope")
        assert problem.status_code == 403
        assert problem.code is ErrorCode.PERMISSION_DENIED


@pytest.mark.unit
class TestTraceMiddleware:
    """Test TraceMiddleware."""

    async def test_generates_trace_id(self):
        request = MagicMock()
        request.headers = {}
        response = MagicMock()
        response.headers = {}
        call_next = AsyncMock(return_value=response)

        result = await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        UUID(result.headers["X-Trace-Id"])

    async def test_propagates_incoming_trace_id_during_request(self):
        seen: list[str | None] = []
        request = MagicMock()
        request.headers = {"X-Trace-Id": "abc-123"}
        response = MagicMock()
        response.headers = {}

        async def call_next(_):
            seen.append(get_trace_id())
            return response

        result = await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        assert seen == ["abc-123"]
        assert result.headers["X-Trace-Id"] == "abc-123"
        assert get_trace_id() is None


@pytest.mark.unit
class TestHostTenantResolution:
    """Test host parsing and tenant lookup."""

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("finance.portal.example", ("finance.portal.example", "finance")),
            ("Finance.Portal.Example:8443", ("finance.portal.example", "finance")),
            ("a.example, proxy.internal", ("a.example", "a")),
            ("localhost", ("localhost", None)),
            ("localhost:8000", ("localhost", None)),
            ("[::1]:8000", (None, None)),
            ("", (None, None)),
            (None, (None, None)),
        ],
    )
    def test_split_host(self, host, expected):
        assert split_host(host) == expected

    async def test_resolver_passes_slug_and_domain(self):
        tenants = AsyncMock()
        tenants.find_active_id.return_value = 3

        tenant_id = await HostTenantResolver(tenants).resolve("finance.portal.example")

        assert tenant_id == 3
        tenants.find_active_id.assert_awaited_once_with(
            slug="finance", domain="finance.portal.example"
        )

    async def test_resolver_without_host(self):
        tenants = AsyncMock()

        assert await HostTenantResolver(tenants).resolve(None) is None
        tenants.find_active_id.assert_not_awaited()
