"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol with bcrypt.

Security:
    - Salted, adaptive, one-way hash
    - Cost factor 12 in production (~250ms per hash)
    - Verification always performs the full computation for a well-formed
      hash, which is what makes the decoy-hash comparison for unknown
      accounts cost the same as a real one
    - Passwords are truncated to 72 UTF-8 bytes before hashing and
      verification, so long input is still hashed rather than rejected

Performance:
    Cost factor is logarithmic: each +1 doubles computation time.
    - 10 = ~60ms
    - 12 = ~250ms
    - 14 = ~1000ms
"""

import bcrypt

# bcrypt only reads the first 72 bytes; newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=12)
        password_hash = password_service.hash_password("S3cret-passphrase")
        password_service.verify_password("S3cret-passphrase", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: bcrypt cost factor (10..20).

        Raises:
            ValueError: If cost_factor is outside 10..20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        """Configured bcrypt cost factor."""
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            60-character bcrypt hash ($2b$<cost>$<salt><hash>).

        Example:
            >>> service = BcryptPasswordService(cost_factor=10)
            >>> service.hash_password("pw") != service.hash_password("pw")
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(_password_bytes(password), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Stored hash.

        Returns:
            True if the password matches, False otherwise (including for
            malformed hashes).
        """
        try:
            return bcrypt.checkpw(
                _password_bytes(password), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            # Malformed hash or encoding problem
            return False
