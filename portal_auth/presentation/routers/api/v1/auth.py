"""Authentication router.

Endpoints:
    POST /api/v1/auth/login       - Password login (may pause for a one-time code)
    POST /api/v1/auth/verify-otp  - Complete a paused login
    POST /api/v1/auth/refresh     - Rotate the refresh token, mint a new pair
    POST /api/v1/auth/logout      - Revoke the refresh token, clear cookies
    GET  /api/v1/auth/me          - Claims of the presented access token

Tokens travel as two HTTP-only, SameSite=Lax cookies. The refresh cookie
is restricted to the auth routes. Both are Secure outside development.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from portal_auth.application.commands import (
    LoginUser,
    LogoutUser,
    RefreshSession,
    RequestContext,
    VerifyOtpAndLogin,
)
from portal_auth.application.dtos import (
    AccountLocked,
    Authenticated,
    CredentialInvalid,
    IssuedTokens,
    OtpInvalid,
    OtpRequired,
    RefreshInvalid,
)
from portal_auth.application.services import SessionFacade
from portal_auth.core.config import settings
from portal_auth.core.container import get_session_facade
from portal_auth.core.enums import ErrorCode
from portal_auth.domain.entities import SessionClaims
from portal_auth.presentation.routers.api.middleware.auth_dependencies import (
    get_current_session,
)
from portal_auth.presentation.routers.api.middleware.request_context import (
    get_request_context,
)
from portal_auth.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from portal_auth.schemas.auth_schemas import (
    LoginRequest,
    MeResponse,
    OtpRequiredResponse,
    TokenResponse,
    VerifyOtpRequest,
)
from portal_auth.schemas.common_schemas import MessageResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])

_INVALID_CREDENTIALS_DETAIL = "Invalid username or password"
_INVALID_OTP_DETAIL = "Invalid or expired verification code"


# =============================================================================
# Cookie helpers
# =============================================================================


def _max_age(expires_at: datetime) -> int:
    return max(int((expires_at - datetime.now(UTC)).total_seconds()), 0)


def set_session_cookies(response: Response, tokens: IssuedTokens) -> None:
    """Attach the access and refresh cookies for a freshly issued pair."""
    response.set_cookie(
        key=settings.access_cookie_name,
        value=tokens.access_token,
        max_age=_max_age(tokens.access_expires_at),
        path="/",
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=tokens.refresh_token,
        max_age=_max_age(tokens.refresh_expires_at),
        path=settings.refresh_cookie_path,
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookies(response: Response) -> None:
    """Expire both session cookies on the client."""
    response.delete_cookie(
        key=settings.access_cookie_name,
        path="/",
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        path=settings.refresh_cookie_path,
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def _authenticated_response(tokens: IssuedTokens) -> JSONResponse:
    body = TokenResponse.from_tokens(tokens)
    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=body.model_dump(mode="json", by_alias=True),
    )
    set_session_cookies(response, tokens)
    return response


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/login",
    response_model=TokenResponse | OtpRequiredResponse,
    responses={
        200: {"description": "Authenticated, or one-time code sent"},
        401: {"description": "Invalid credentials", "model": ProblemDetails},
        423: {"description": "Account locked", "model": ProblemDetails},
    },
    summary="Log in",
    description="Authenticate with username or email and password.",
)
async def login(
    request: Request,
    data: LoginRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> JSONResponse:
    """Password login.

    POST /api/v1/auth/login

    Returns:
        200 with the token pair (cookies set), 200 ``{requiresOtp, email}``
        when a second factor is required, 401 ``invalid_credentials`` or
        423 ``account_locked``.
    """
    outcome = await facade.login(
        LoginUser(
            identifier=data.username_or_email,
            password=data.password,
            context=context,
        )
    )

    match outcome:
        case Authenticated(tokens=tokens):
            return _authenticated_response(tokens)
        case OtpRequired(masked_email=masked_email):
            body = OtpRequiredResponse(email=masked_email)
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content=body.model_dump(mode="json", by_alias=True),
            )
        case AccountLocked(locked_until=locked_until):
            return ErrorResponseBuilder.from_error_code(
                ErrorCode.ACCOUNT_LOCKED,
                request,
                detail="Account is temporarily locked after repeated failed logins",
                locked_until=locked_until.isoformat(),
            )
        case CredentialInvalid():
            return ErrorResponseBuilder.from_error_code(
                ErrorCode.INVALID_CREDENTIALS,
                request,
                detail=_INVALID_CREDENTIALS_DETAIL,
            )


@router.post(
    "/verify-otp",
    response_model=TokenResponse,
    responses={
        401: {"description": "Invalid or expired code", "model": ProblemDetails},
        423: {"description": "Account locked", "model": ProblemDetails},
    },
    summary="Verify one-time code",
    description="Complete a login that required an emailed one-time code.",
)
async def verify_otp(
    request: Request,
    data: VerifyOtpRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> JSONResponse:
    """Complete a paused login.

    POST /api/v1/auth/verify-otp
    """
    outcome = await facade.verify_otp_and_login(
        VerifyOtpAndLogin(
            identifier=data.username_or_email,
            code=data.code,
            context=context,
        )
    )

    match outcome:
        case Authenticated(tokens=tokens):
            return _authenticated_response(tokens)
        case AccountLocked(locked_until=locked_until):
            return ErrorResponseBuilder.from_error_code(
                ErrorCode.ACCOUNT_LOCKED,
                request,
                detail="Account is temporarily locked after repeated failed logins",
                locked_until=locked_until.isoformat(),
            )
        case OtpInvalid():
            return ErrorResponseBuilder.from_error_code(
                ErrorCode.INVALID_OTP,
                request,
                detail=_INVALID_OTP_DETAIL,
            )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        401: {
            "description": "Missing, expired or revoked refresh token",
            "model": ProblemDetails,
        },
    },
    summary="Refresh session",
    description="Exchange the refresh cookie for a new token pair.",
)
async def refresh(
    request: Request,
    context: Annotated[RequestContext, Depends(get_request_context)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> JSONResponse:
    """Rotate the refresh token.

    POST /api/v1/auth/refresh

    On any failure both cookies are cleared.
    """
    outcome = await facade.refresh(
        RefreshSession(
            refresh_token=request.cookies.get(settings.refresh_cookie_name),
            context=context,
        )
    )

    match outcome:
        case Authenticated(tokens=tokens):
            return _authenticated_response(tokens)
        case RefreshInvalid(code=code):
            response = ErrorResponseBuilder.from_error_code(
                code,
                request,
                detail="Refresh token is missing"
                if code is ErrorCode.NO_REFRESH_TOKEN
                else "Refresh token is invalid, expired or revoked",
            )
            clear_session_cookies(response)
            return response


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="Revoke the refresh token and clear session cookies.",
)
async def logout(
    request: Request,
    context: Annotated[RequestContext, Depends(get_request_context)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> JSONResponse:
    """Log out.

    POST /api/v1/auth/logout → 200 even without a session.
    """
    await facade.logout(
        LogoutUser(
            refresh_token=request.cookies.get(settings.refresh_cookie_name),
            context=context,
        )
    )
    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=MessageResponse(message="Logged out").model_dump(by_alias=True),
    )
    clear_session_cookies(response)
    return response


@router.get(
    "/me",
    response_model=MeResponse,
    responses={401: {"description": "Not authenticated", "model": ProblemDetails}},
    summary="Current session",
)
async def me(
    claims: Annotated[SessionClaims, Depends(get_current_session)],
) -> MeResponse:
    """Return the claims of the presented access token."""
    return MeResponse.from_claims(claims)
