"""Mail dispatch adapters."""

from portal_auth.infrastructure.email.smtp_mail_dispatcher import SmtpMailDispatcher

__all__ = ["SmtpMailDispatcher"]
