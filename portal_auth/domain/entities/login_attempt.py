"""Login attempt record (append-only, used for throttling and forensics)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginAttempt:
    """One inbound authentication attempt.

    Attributes:
        id: Row identifier.
        ip_address: Source address the request came from.
        identifier: Username or email supplied, if any.
        user_agent: Client User-Agent header.
        attempted_at: When the attempt was received.
    """

    id: int
    ip_address: str
    identifier: str | None
    user_agent: str | None
    attempted_at: datetime
