"""Mail dispatch errors."""

from dataclasses import dataclass

from portal_auth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class MailError(DomainError):
    """Message could not be handed to the mail server.

    Attributes:
        recipient: Masked recipient address, safe to log.
    """

    recipient: str | None = None
