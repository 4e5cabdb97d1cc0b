"""Access and refresh token issuance.

Access tokens are signed and stateless. Refresh tokens are opaque random
values persisted as digests, so the server can invalidate them regardless
of what the client holds.

Renewal rotates: redeeming a refresh token revokes it (reason ``rotated``)
and the caller mints a complete new pair. Presenting a token that was
already rotated fails and is audited as ``refresh_token_revoked``.
"""

from datetime import UTC, datetime

from portal_auth.application.dtos import IssuedTokens
from portal_auth.core.result import Failure, Result, Success
from portal_auth.domain.entities import AccessGrants, Account
from portal_auth.domain.errors import FailureReason
from portal_auth.domain.protocols import (
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
    TokenGenerationProtocol,
)


class TokenIssuer:
    """Mint token pairs, redeem and revoke refresh tokens.

    Usage:
        issuer = TokenIssuer(
            token_service=get_token_service(),
            refresh_token_service=get_refresh_token_service(),
            refresh_tokens=RefreshTokenRepository(session),
        )
        tokens = await issuer.issue_tokens(account, grants)
    """

    def __init__(
        self,
        *,
        token_service: TokenGenerationProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        refresh_tokens: RefreshTokenRepository,
    ) -> None:
        self._token_service = token_service
        self._refresh_token_service = refresh_token_service
        self._refresh_tokens = refresh_tokens

    async def issue_tokens(
        self,
        account: Account,
        grants: AccessGrants,
        *,
        now: datetime | None = None,
    ) -> IssuedTokens:
        """Mint an access token and persist a new refresh token.

        Args:
            account: Authenticated account.
            grants: Roles and permissions resolved for this mint.
            now: Issue time.

        Returns:
            IssuedTokens with both raw tokens and expiries.
        """
        now = now or datetime.now(UTC)

        access_token, access_expires_at = self._token_service.generate_access_token(
            account_id=account.id,
            username=account.username,
            tenant_id=account.tenant_id,
            roles=grants.roles,
            permissions=grants.permissions,
            now=now,
        )

        refresh_token, token_hash = self._refresh_token_service.generate_token()
        refresh_expires_at = self._refresh_token_service.calculate_expiration(now)
        await self._refresh_tokens.add(
            account_id=account.id,
            token_hash=token_hash,
            expires_at=refresh_expires_at,
        )

        return IssuedTokens(
            access_token=access_token,
            access_expires_at=access_expires_at,
            refresh_token=refresh_token,
            refresh_expires_at=refresh_expires_at,
            account_id=account.id,
            username=account.username,
            tenant_id=account.tenant_id,
        )

    async def redeem(
        self, refresh_token: str, *, now: datetime | None = None
    ) -> Result[int, str]:
        """Consume a refresh token for renewal.

        Args:
            refresh_token: Raw token presented by the client.
            now: Reference time.

        Returns:
            Success(account_id) if the token was usable and is now revoked,
            Failure(reason) with one of the REFRESH_* FailureReason values.
        """
        now = now or datetime.now(UTC)
        token_hash = self._refresh_token_service.hash_token(refresh_token)

        account_id = await self._refresh_tokens.consume(
            token_hash, now=now, reason=FailureReason.ROTATED
        )
        if account_id is not None:
            return Success(value=account_id)

        # Diagnose for the audit trail; every branch is the same failure to the caller
        existing = await self._refresh_tokens.find_by_hash(token_hash)
        if existing is None:
            return Failure(error=FailureReason.REFRESH_NOT_FOUND)
        if existing.revoked:
            return Failure(error=FailureReason.REFRESH_REVOKED)
        return Failure(error=FailureReason.REFRESH_EXPIRED)

    async def revoke(
        self,
        refresh_token: str,
        *,
        reason: str = FailureReason.LOGGED_OUT,
        now: datetime | None = None,
    ) -> bool:
        """Revoke a refresh token.

        Returns:
            True if the token existed and was not revoked before.
        """
        return await self._refresh_tokens.revoke(
            self._refresh_token_service.hash_token(refresh_token),
            now=now or datetime.now(UTC),
            reason=reason,
        )
