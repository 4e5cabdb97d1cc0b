"""Login attempts router (administration).

Endpoints:
    GET    /api/v1/login-attempts        - Paged listing, newest first
    DELETE /api/v1/login-attempts/{id}   - Delete one attempt
    DELETE /api/v1/login-attempts        - Purge all, or those older than N minutes

Every endpoint requires the ``manage_all`` permission.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import Response

from portal_auth.application.commands import RequestContext
from portal_auth.application.services import LoginAttemptAdmin
from portal_auth.core.container import get_login_attempt_admin
from portal_auth.core.result import Failure, Success
from portal_auth.domain.entities import SessionClaims
from portal_auth.domain.entities.session_claims import MANAGE_ALL
from portal_auth.presentation.routers.api.middleware.auth_dependencies import (
    require_permission,
)
from portal_auth.presentation.routers.api.middleware.request_context import (
    get_request_context,
)
from portal_auth.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from portal_auth.schemas.login_attempt_schemas import (
    LoginAttemptListResponse,
    LoginAttemptPurgeResponse,
)

router = APIRouter(prefix="/login-attempts", tags=["Login Attempts"])

_PROTECTED_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"description": "Not authenticated", "model": ProblemDetails},
    403: {"description": "Missing manage_all permission", "model": ProblemDetails},
}


@router.get(
    "",
    response_model=LoginAttemptListResponse,
    responses=_PROTECTED_RESPONSES,
    summary="List login attempts",
)
async def list_login_attempts(
    _claims: Annotated[SessionClaims, Depends(require_permission(MANAGE_ALL))],
    admin: Annotated[LoginAttemptAdmin, Depends(get_login_attempt_admin)],
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1, le=100, description="Items per page")
    ] = 20,
    search: Annotated[
        str | None,
        Query(max_length=255, description="Filter on IP, identifier or user agent"),
    ] = None,
) -> LoginAttemptListResponse:
    """List recorded attempts.

    GET /api/v1/login-attempts?page=1&pageSize=20&search=10.0.
    """
    result = await admin.list_attempts(page=page, page_size=page_size, search=search)
    return LoginAttemptListResponse.from_page(result)


@router.delete(
    "/{attempt_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **_PROTECTED_RESPONSES,
        404: {"description": "Attempt not found", "model": ProblemDetails},
    },
    summary="Delete login attempt",
)
async def delete_login_attempt(
    request: Request,
    claims: Annotated[SessionClaims, Depends(require_permission(MANAGE_ALL))],
    context: Annotated[RequestContext, Depends(get_request_context)],
    admin: Annotated[LoginAttemptAdmin, Depends(get_login_attempt_admin)],
    attempt_id: Annotated[int, Path(ge=1)],
) -> Response:
    """Delete one attempt.

    DELETE /api/v1/login-attempts/{id} → 204 No Content
    """
    match await admin.delete(attempt_id, claims=claims, context=context):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_error_code(
                error.code, request, detail=error.message
            )


@router.delete(
    "",
    response_model=LoginAttemptPurgeResponse,
    responses=_PROTECTED_RESPONSES,
    summary="Purge login attempts",
)
async def purge_login_attempts(
    claims: Annotated[SessionClaims, Depends(require_permission(MANAGE_ALL))],
    context: Annotated[RequestContext, Depends(get_request_context)],
    admin: Annotated[LoginAttemptAdmin, Depends(get_login_attempt_admin)],
    older_than_minutes: Annotated[
        int | None,
        Query(alias="olderThanMinutes", ge=0, description="Keep newer attempts"),
    ] = None,
) -> LoginAttemptPurgeResponse:
    """Purge attempts.

    DELETE /api/v1/login-attempts?olderThanMinutes=60
    """
    deleted = await admin.purge(
        claims=claims, context=context, older_than_minutes=older_than_minutes
    )
    return LoginAttemptPurgeResponse(deleted=deleted)
