"""Password verification with a decoy hash for unknown accounts.

If no account matches the identifier, the supplied password is still
checked against a decoy hash, so "unknown user" and "wrong password" take
the same time. Verification never returns before a hash comparison has
run.

The decoy is an ordinary bcrypt hash of a random secret, produced once per
process at startup with the configured cost factor. It can therefore never
match, and it costs exactly as much as a real account's hash.
"""

import asyncio
import secrets

from portal_auth.domain.entities import Account
from portal_auth.domain.protocols import PasswordHashingProtocol


class CredentialVerifier:
    """Constant-cost password verification.

    Usage:
        verifier = CredentialVerifier.with_generated_decoy(password_service)
        ok = await verifier.verify(password, account)  # account may be None
    """

    def __init__(self, password_service: PasswordHashingProtocol, decoy_hash: str) -> None:
        """Initialize verifier.

        Args:
            password_service: Hashing adapter.
            decoy_hash: Hash compared against when no account exists.
        """
        self._password_service = password_service
        self._decoy_hash = decoy_hash

    @classmethod
    def with_generated_decoy(
        cls, password_service: PasswordHashingProtocol
    ) -> "CredentialVerifier":
        """Build a verifier whose decoy is the hash of a random secret."""
        decoy_hash = password_service.hash_password(secrets.token_urlsafe(32))
        return cls(password_service, decoy_hash)

    async def verify(self, password: str, account: Account | None) -> bool:
        """Check a password for an account that may not exist.

        The hash comparison runs in a worker thread; bcrypt at cost 12 would
        otherwise block the event loop for a quarter of a second.

        Args:
            password: Supplied plaintext password.
            account: Account found for the identifier, or None.

        Returns:
            True only if an account exists and the password matches it.
        """
        password_hash = account.password_hash if account is not None else self._decoy_hash
        matched = await asyncio.to_thread(
            self._password_service.verify_password, password, password_hash
        )
        return matched and account is not None
