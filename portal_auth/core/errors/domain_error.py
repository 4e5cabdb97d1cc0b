"""Base error value for Result failures.

DomainError is NOT an exception. It travels inside ``Failure`` so that the
caller decides what a failure means for the current operation.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class MailError(DomainError):
        recipient: str | None = None
"""

from dataclasses import dataclass

from portal_auth.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error value (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
