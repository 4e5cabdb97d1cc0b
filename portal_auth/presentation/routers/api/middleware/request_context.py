"""Request metadata dependency.

Builds the RequestContext every SessionFacade command carries: source IP,
User-Agent and the tenant the request host addresses.
"""

from typing import Annotated

from fastapi import Depends, Request

from portal_auth.application.commands import RequestContext
from portal_auth.core.container import get_tenant_resolver
from portal_auth.domain.protocols import TenantResolverProtocol

UNKNOWN_IP = "unknown"
MAX_USER_AGENT_LENGTH = 500


def request_host(request: Request) -> str | None:
    """Host the client addressed, preferring X-Forwarded-Host."""
    return request.headers.get("x-forwarded-host") or request.headers.get("host")


async def get_request_tenant(
    request: Request,
    resolver: Annotated[TenantResolverProtocol, Depends(get_tenant_resolver)],
) -> int | None:
    """Tenant constraint of the current request, None on a platform host."""
    return await resolver.resolve(request_host(request))


async def get_request_context(
    request: Request,
    tenant_id: Annotated[int | None, Depends(get_request_tenant)],
) -> RequestContext:
    """Collect request metadata for commands and audit entries.

    The source IP is the socket peer address; proxy headers are not trusted.
    """
    user_agent = request.headers.get("user-agent")
    return RequestContext(
        ip_address=request.client.host if request.client else UNKNOWN_IP,
        user_agent=user_agent[:MAX_USER_AGENT_LENGTH] if user_agent else None,
        tenant_id=tenant_id,
    )
