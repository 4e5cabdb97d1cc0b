"""Core shared kernel.

Foundational building blocks used by every layer:
- Result types for explicit success/failure values
- Base error classes carried inside Failure results
- Error codes and environment enums

The core package has NO dependencies on other application layers.
"""

from portal_auth.core.enums import Environment, ErrorCode
from portal_auth.core.errors import DomainError, NotFoundError
from portal_auth.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
]
