"""Access token dependencies.

FastAPI dependencies for extracting and validating access tokens.
The token is read from the ``Authorization: Bearer`` header first, then
from the access cookie.

Usage:
    @router.get("/protected")
    async def protected_route(
        claims: SessionClaims = Depends(get_current_session),
    ):
        return {"account_id": claims.account_id}

    @router.delete("/admin-only")
    async def admin_route(
        claims: SessionClaims = Depends(require_permission(MANAGE_ALL)),
    ):
        ...
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portal_auth.core.config import settings
from portal_auth.core.container import get_token_service
from portal_auth.core.enums import ErrorCode
from portal_auth.core.result import Failure, Success
from portal_auth.domain.entities import SessionClaims
from portal_auth.domain.protocols import TokenGenerationProtocol
from portal_auth.presentation.routers.api.v1.errors import ApiProblem

# auto_error=False: the cookie is an alternative transport
bearer_scheme = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _claims_from_payload(payload: dict[str, Any]) -> SessionClaims:
    """Build SessionClaims from a validated token payload.

    Raises:
        KeyError, TypeError, ValueError: If a claim is missing or malformed.
    """
    tenant_raw = payload.get("tenant_id")
    return SessionClaims(
        account_id=int(payload["sub"]),
        username=str(payload.get("unique_name", "")),
        tenant_id=int(tenant_raw) if tenant_raw is not None else None,
        roles=tuple(str(role) for role in payload.get("roles") or ()),
        permissions=tuple(str(perm) for perm in payload.get("permissions") or ()),
        token_id=str(payload["jti"]),
    )


async def get_current_session(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> SessionClaims:
    """Resolve the caller's session from the access token.

    Args:
        request: Current request (for the access cookie).
        credentials: Bearer token from the Authorization header, if any.
        token_service: Access token service (injected).

    Returns:
        SessionClaims of a valid token.

    Raises:
        ApiProblem 401: If the token is missing, invalid or expired.
    """
    token = (
        credentials.credentials
        if credentials is not None
        else request.cookies.get(settings.access_cookie_name)
    )
    if not token:
        raise ApiProblem(
            ErrorCode.TOKEN_INVALID,
            "Authentication required",
            headers=_BEARER_CHALLENGE,
        )

    match token_service.validate_access_token(token):
        case Success(value=payload):
            try:
                return _claims_from_payload(payload)
            except (KeyError, TypeError, ValueError) as e:
                raise ApiProblem(
                    ErrorCode.TOKEN_INVALID,
                    "Invalid token payload",
                    headers=_BEARER_CHALLENGE,
                ) from e
        case Failure(error=error):
            code = (
                ErrorCode.TOKEN_EXPIRED
                if error == ErrorCode.TOKEN_EXPIRED.value
                else ErrorCode.TOKEN_INVALID
            )
            raise ApiProblem(
                code,
                "Access token expired"
                if code is ErrorCode.TOKEN_EXPIRED
                else "Invalid access token",
                headers=_BEARER_CHALLENGE,
            )


def require_permission(
    permission: str,
) -> Callable[..., Awaitable[SessionClaims]]:
    """Build a dependency enforcing a permission claim.

    ``manage_all`` satisfies every permission.

    Args:
        permission: Required permission name.

    Returns:
        Dependency returning the caller's SessionClaims.
    """

    async def _require(
        claims: Annotated[SessionClaims, Depends(get_current_session)],
    ) -> SessionClaims:
        if not claims.has_permission(permission):
            raise ApiProblem(
                ErrorCode.PERMISSION_DENIED,
                f"Permission '{permission}' required",
            )
        return claims

    return _require
