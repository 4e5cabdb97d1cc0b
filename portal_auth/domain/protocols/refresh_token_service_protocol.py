"""Refresh token service protocol (port)."""

from datetime import datetime
from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Generate and digest opaque refresh tokens.

    Implementations:
        - RefreshTokenService: ``secrets`` + SHA-256
    """

    def generate_token(self) -> tuple[str, str]:
        """Return (raw token, digest to persist)."""
        ...

    def hash_token(self, token: str) -> str:
        """Return the digest persisted for a raw token."""
        ...

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Return the expiry of a token issued at now."""
        ...
