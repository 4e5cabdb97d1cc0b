"""Authentication request/response schemas.

Endpoints:
    POST /api/v1/auth/login       - Password login
    POST /api/v1/auth/verify-otp  - Complete login with emailed code
    POST /api/v1/auth/refresh     - Rotate refresh token
    POST /api/v1/auth/logout      - Revoke refresh token
    GET  /api/v1/auth/me          - Claims of the current access token
"""

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from portal_auth.application.dtos import IssuedTokens
from portal_auth.domain.entities import SessionClaims
from portal_auth.schemas.common_schemas import CamelModel


# =============================================================================
# Login
# =============================================================================


class LoginRequest(CamelModel):
    """Request schema for password login.

    POST /api/v1/auth/login
    """

    username_or_email: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Username or email address",
        examples=["alice"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=1024,
        description="Account password",
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {"usernameOrEmail": "alice@example.com", "password": "..."}
        },
    )


class VerifyOtpRequest(CamelModel):
    """Request schema for completing a login with a one-time code.

    POST /api/v1/auth/verify-otp
    """

    username_or_email: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Same identifier used for the password step",
    )
    code: str = Field(
        ...,
        min_length=1,
        max_length=16,
        description="Six-digit code from the email",
        examples=["042917"],
    )


class TokenResponse(CamelModel):
    """Successful login or renewal.

    The same tokens are also set as HTTP-only cookies.
    """

    access_token: str = Field(..., description="Signed access token")
    token_type: str = Field(default="bearer", description="Always 'bearer'")
    expires_at: datetime = Field(..., description="Access token expiry (UTC)")
    refresh_token: str = Field(..., description="Opaque refresh token")
    refresh_expires_at: datetime = Field(..., description="Refresh token expiry (UTC)")
    account_id: int = Field(..., description="Authenticated account")
    username: str = Field(..., description="Login name")
    tenant_id: int | None = Field(
        None, description="Tenant of the account, null for platform accounts"
    )

    @classmethod
    def from_tokens(cls, tokens: IssuedTokens) -> "TokenResponse":
        """Build the response from an issued token pair."""
        return cls(
            access_token=tokens.access_token,
            expires_at=tokens.access_expires_at,
            refresh_token=tokens.refresh_token,
            refresh_expires_at=tokens.refresh_expires_at,
            account_id=tokens.account_id,
            username=tokens.username,
            tenant_id=tokens.tenant_id,
        )


class OtpRequiredResponse(CamelModel):
    """Password accepted; a one-time code was sent."""

    requires_otp: Literal[True] = Field(default=True, description="Always true")
    email: str = Field(..., description="Masked destination address")


# =============================================================================
# Current session
# =============================================================================


class MeResponse(CamelModel):
    """Claims of the presented access token."""

    account_id: int
    username: str
    tenant_id: int | None = None
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)

    @classmethod
    def from_claims(cls, claims: SessionClaims) -> "MeResponse":
        return cls(
            account_id=claims.account_id,
            username=claims.username,
            tenant_id=claims.tenant_id,
            roles=list(claims.roles),
            permissions=list(claims.permissions),
        )
