"""Access token protocol (port).

Access tokens are short-lived, signed and validated statelessly. Refresh
tokens are opaque and handled by the refresh token service.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from portal_auth.core.result import Result


class TokenGenerationProtocol(Protocol):
    """Signed access token generation and validation interface.

    Implementations:
        - JWTService: HMAC-SHA256

    Usage:
        token, expires_at = token_service.generate_access_token(
            account_id=account.id,
            username=account.username,
            tenant_id=account.tenant_id,
            roles=grants.roles,
            permissions=grants.permissions,
        )

        match token_service.validate_access_token(token):
            case Success(value=payload):
                account_id = int(payload["sub"])
            case Failure(error=error):
                ...
    """

    def generate_access_token(
        self,
        *,
        account_id: int,
        username: str,
        tenant_id: int | None,
        roles: Sequence[str],
        permissions: Sequence[str],
        now: datetime | None = None,
    ) -> tuple[str, datetime]:
        """Mint an access token.

        Args:
            account_id: Subject (``sub`` claim).
            username: Login name (``unique_name`` claim).
            tenant_id: Tenant id, or None for a platform account. None is
                encoded as an explicit JSON null, never as 0 or "".
            roles: Role names (``roles`` claim).
            permissions: Permission names (``permissions`` claim).
            now: Issue time (defaults to current UTC time).

        Returns:
            Tuple of (encoded token, expiry time).
        """
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Verify signature, expiry, issuer and audience.

        Returns:
            Success(payload) or Failure(reason string).
        """
        ...
