"""Opaque refresh token service.

Refresh tokens are random strings, not signed tokens. The raw value goes to
the client cookie; the database keeps a SHA-256 digest.

Security:
    - 32 bytes from ``secrets`` (256 bits of entropy), URL-safe base64
    - Only the SHA-256 digest is stored; lookups go through the unique
      index on the digest
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta


class RefreshTokenService:
    """Generate and digest opaque refresh tokens.

    Usage:
        service = RefreshTokenService(expiration_days=7)
        token, token_hash = service.generate_token()
        expires_at = service.calculate_expiration()
    """

    def __init__(self, expiration_days: int = 7) -> None:
        """Initialize refresh token service.

        Args:
            expiration_days: Refresh token lifetime in days.
        """
        if expiration_days <= 0:
            msg = "Expiration must be a positive number of days"
            raise ValueError(msg)
        self._expiration_days = expiration_days

    def generate_token(self) -> tuple[str, str]:
        """Create a new token.

        Returns:
            Tuple of (raw token for the client, digest for storage).
        """
        token = secrets.token_urlsafe(32)
        return token, self.hash_token(token)

    @staticmethod
    def hash_token(token: str) -> str:
        """Return the hex SHA-256 digest stored for a raw token."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Compute expiry for a token issued at now."""
        return (now or datetime.now(UTC)) + timedelta(days=self._expiration_days)
