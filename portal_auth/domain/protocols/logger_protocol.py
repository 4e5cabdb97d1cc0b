"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging contract. Every call is a message plus
key-value context.

Security:
    NEVER log passwords, one-time codes, access tokens or refresh tokens.
    Log masked emails and account ids instead.

Usage:
    from portal_auth.core.container import get_logger

    logger = get_logger()
    logger.info("Login succeeded", account_id=account.id, tenant_id=tenant_id)

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("Login throttled", ip_address=ip)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Used for degraded but non-fatal paths (dropped audit rows, failed
        mail delivery, throttled sources).
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message (service cannot operate)."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
