"""Single-use, time-boxed numeric login codes."""

import secrets
from datetime import UTC, datetime, timedelta

from portal_auth.domain.enums import OtpPurpose
from portal_auth.domain.protocols import OtpCodeRepository

OTP_LENGTH = 6


def generate_code() -> str:
    """Return a uniformly random 6-digit code (leading zeros kept)."""
    return f"{secrets.randbelow(10**OTP_LENGTH):0{OTP_LENGTH}d}"


class OtpChallenge:
    """Issue and verify one-time codes keyed by (email, purpose).

    Issuing supersedes every earlier unused code of the pair. Verifying
    consumes the code atomically; wrong, expired and already used codes
    all fail the same way.
    """

    def __init__(self, otp_codes: OtpCodeRepository, *, ttl_minutes: int = 5) -> None:
        """Initialize challenge service.

        Args:
            otp_codes: One-time code repository.
            ttl_minutes: Code lifetime.
        """
        self._otp_codes = otp_codes
        self._ttl = timedelta(minutes=ttl_minutes)

    @property
    def ttl_minutes(self) -> int:
        """Code lifetime in whole minutes."""
        return int(self._ttl.total_seconds() // 60)

    async def issue(
        self,
        email: str,
        purpose: OtpPurpose = OtpPurpose.LOGIN,
        *,
        now: datetime | None = None,
    ) -> str:
        """Create a fresh code for (email, purpose).

        Returns:
            The plaintext code, to be handed to the mail dispatcher.
        """
        code = generate_code()
        await self._otp_codes.replace_unused(
            email=email,
            purpose=purpose.value,
            code=code,
            expires_at=(now or datetime.now(UTC)) + self._ttl,
        )
        return code

    async def verify(
        self,
        email: str,
        code: str,
        purpose: OtpPurpose = OtpPurpose.LOGIN,
        *,
        now: datetime | None = None,
    ) -> bool:
        """Consume a code.

        Returns:
            True only for the first successful verification of an unexpired
            code.
        """
        candidate = code.strip()
        if len(candidate) != OTP_LENGTH or not candidate.isdigit():
            return False
        return await self._otp_codes.consume(
            email=email,
            code=candidate,
            purpose=purpose.value,
            now=now or datetime.now(UTC),
        )
