"""JWT access token service (adapter).

Implements TokenGenerationProtocol with PyJWT and HMAC-SHA256.

Claims:
    sub          account id (string, per RFC 7519)
    unique_name  username
    tenant_id    integer tenant id, or JSON null for a platform account
    roles        role names
    permissions  permission names
    jti          unique token id (UUIDv7, time-ordered)
    iat / exp    issue and expiry (epoch seconds)
    iss / aud    configured issuer and audience
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from portal_auth.core.enums import ErrorCode
from portal_auth.core.result import Failure, Result, Success


class JWTService:
    """Access token generation and validation service.

    Usage:
        from portal_auth.core.container import get_token_service

        token_service = get_token_service()
        token, expires_at = token_service.generate_access_token(
            account_id=7,
            username="alice",
            tenant_id=None,
            roles=["admin"],
            permissions=["manage_all"],
        )
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 30,
        *,
        algorithm: str = "HS256",
        issuer: str = "portal-auth",
        audience: str = "portal",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Symmetric signing key (at least 32 characters).
            expiration_minutes: Access token lifetime.
            algorithm: HMAC algorithm.
            issuer: ``iss`` claim written and required.
            audience: ``aud`` claim written and required.

        Raises:
            ValueError: If the key is too short or the lifetime not positive.
        """
        if len(secret_key) < 32:
            msg = "Secret key must be at least 32 characters (256 bits)"
            raise ValueError(msg)
        if expiration_minutes <= 0:
            msg = "Expiration must be a positive number of minutes"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience

    @property
    def expiration_minutes(self) -> int:
        """Configured access token lifetime."""
        return self._expiration_minutes

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
        """Generate a signed access token.

        Args:
            account_id: Subject.
            username: Login name.
            tenant_id: Tenant id or None (encoded as null).
            roles: Role names.
            permissions: Permission names.
            now: Issue time (defaults to current UTC time).

        Returns:
            Tuple of (token, expiry).

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token, _ = service.generate_access_token(
            ...     account_id=1, username="a", tenant_id=None,
            ...     roles=[], permissions=[],
            ... )
            >>> len(token.split("."))
            3
        """
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + timedelta(minutes=self._expiration_minutes)

        payload: dict[str, Any] = {
            "sub": str(account_id),
            "unique_name": username,
            "tenant_id": tenant_id,
            "roles": list(roles),
            "permissions": list(permissions),
            "jti": str(uuid7()),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._issuer,
            "aud": self._audience,
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token, expires_at

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate an access token and return its payload.

        Args:
            token: Encoded token.

        Returns:
            Success(payload), or Failure with ``token_expired`` /
            ``token_invalid``.

        Note:
            Signature, ``exp``, ``iss`` and ``aud`` are verified; ``sub``,
            ``jti`` and ``exp`` are required.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["sub", "exp", "jti"]},
            )
            return Success(value=payload)

        except ExpiredSignatureError:
            return Failure(error=ErrorCode.TOKEN_EXPIRED.value)
        except InvalidTokenError:
            return Failure(error=ErrorCode.TOKEN_INVALID.value)
