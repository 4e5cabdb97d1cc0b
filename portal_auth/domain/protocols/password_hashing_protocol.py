"""Password hashing protocol (port).

Infrastructure provides the bcrypt adapter.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Implementations:
        - BcryptPasswordService: bcrypt, cost factor 12 in production
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Salted hash string (bcrypt format: $2b$12$...).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Compare a plaintext password with a stored hash.

        Must run the full hash computation for any well-formed hash and
        must never raise; malformed hashes verify as False.
        """
        ...
