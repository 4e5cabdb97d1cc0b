"""Mail dispatcher protocol (port).

The authentication core asks for a one-time code to be delivered and does
not manage retries. Delivery problems are returned, not raised: the code
has already been issued and stays valid.
"""

from typing import Protocol

from portal_auth.core.result import Result
from portal_auth.domain.errors import MailError


class MailDispatcherProtocol(Protocol):
    """Deliver one-time login codes by email.

    Implementations:
        - SmtpMailDispatcher: SMTP (logs instead of sending when unconfigured)
    """

    async def send_otp(
        self, *, email: str, code: str, expires_minutes: int
    ) -> Result[None, MailError]:
        """Send a one-time code.

        Args:
            email: Recipient address.
            code: The 6-digit code.
            expires_minutes: Lifetime quoted in the message body.

        Returns:
            Success(None) or Failure(MailError).
        """
        ...
