"""Core errors package.

Usage:
    from portal_auth.core.errors import DomainError, NotFoundError
"""

from portal_auth.core.errors.common_errors import NotFoundError
from portal_auth.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "NotFoundError",
]
