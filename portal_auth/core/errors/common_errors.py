"""Generic error values shared across layers."""

from dataclasses import dataclass

from portal_auth.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Kind of resource (login_attempt, account, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str
