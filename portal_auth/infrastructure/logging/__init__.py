"""Structured logging adapters."""

from portal_auth.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
