"""Per-source-IP login throttle.

Counts attempts from one IP over a trailing window (rows newer than
``now - window``, not a fixed bucket). Every attempt is recorded before
it is evaluated, throttled or not, so sustained abuse keeps the source
blocked.
"""

from datetime import UTC, datetime, timedelta

from portal_auth.domain.protocols import LoginAttemptRepository


class LoginThrottle:
    """Rolling-window attempt counter keyed by source IP.

    With the defaults, the first 10 attempts inside 60 seconds are
    evaluated on their merits and the 11th is rejected.

    Usage:
        throttle = LoginThrottle(LoginAttemptRepository(session))
        if not await throttle.register(ip, identifier=identifier):
            # reject generically
            ...
    """

    def __init__(
        self,
        attempts: LoginAttemptRepository,
        *,
        max_attempts: int = 10,
        window_seconds: int = 60,
    ) -> None:
        """Initialize throttle.

        Args:
            attempts: Login attempt repository.
            max_attempts: Attempts allowed per IP inside the window.
            window_seconds: Trailing window length.
        """
        self._attempts = attempts
        self._max_attempts = max_attempts
        self._window = timedelta(seconds=window_seconds)

    async def record_attempt(
        self,
        ip_address: str,
        *,
        identifier: str | None = None,
        user_agent: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Append an attempt row for ip_address."""
        await self._attempts.add(
            ip_address=ip_address,
            identifier=identifier,
            user_agent=user_agent,
            attempted_at=now or datetime.now(UTC),
        )

    async def allow(self, ip_address: str, *, now: datetime | None = None) -> bool:
        """Decide whether the latest attempt from ip_address may proceed.

        The count includes the attempt already recorded for the current
        request.
        """
        since = (now or datetime.now(UTC)) - self._window
        recent = await self._attempts.count_since(ip_address, since)
        return recent <= self._max_attempts

    async def register(
        self,
        ip_address: str,
        *,
        identifier: str | None = None,
        user_agent: str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Record the attempt, then decide on it.

        Returns:
            True if the attempt may proceed to credential evaluation.
        """
        now = now or datetime.now(UTC)
        await self.record_attempt(
            ip_address, identifier=identifier, user_agent=user_agent, now=now
        )
        return await self.allow(ip_address, now=now)
