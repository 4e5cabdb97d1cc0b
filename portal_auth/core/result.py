"""Result types for explicit success/failure values.

Collaborators whose failure must never abort a login (audit sink, mail
dispatcher) and the token paths return a Result instead of raising. The
caller is forced to look at the value, and ignoring a Failure becomes a
visible decision in code rather than a forgotten ``except``.

Usage:
    result = await audit.record(action=AuditAction.LOGIN_ATTEMPT, ...)
    match result:
        case Success():
            pass
        case Failure(error=error):
            logger.warning("Audit record dropped", error_code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: Payload produced by the operation.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Error value describing what went wrong.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
