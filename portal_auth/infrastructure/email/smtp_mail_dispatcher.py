"""SMTP implementation of MailDispatcherProtocol.

Supports:
- STARTTLS (port 587), implicit TLS (port 465) or, for local mail
  catchers, no encryption
- multipart/alternative messages (plain text and HTML)
- Development fallback: when no SMTP host is configured, the dispatch is
  logged instead of sent

``smtplib`` is blocking, so delivery runs in a worker thread with an overall
timeout; a slow or unreachable mail server never stalls the event loop.
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from portal_auth.core.enums import ErrorCode, SmtpSecurity
from portal_auth.core.result import Failure, Result, Success
from portal_auth.domain.errors import MailError
from portal_auth.domain.policies import mask_email
from portal_auth.domain.protocols import LoggerProtocol

OTP_SUBJECT = "Your login verification code"


class SmtpMailDispatcher:
    """Deliver one-time login codes over SMTP."""

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        smtp_host: str | None = None,
        smtp_port: int = 587,
        smtp_username: str | None = None,
        smtp_password: str | None = None,
        smtp_security: SmtpSecurity = SmtpSecurity.STARTTLS,
        from_email: str = "no-reply@localhost",
        from_name: str = "Portal",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._logger = logger
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.smtp_security = smtp_security
        self.from_email = from_email
        self.from_name = from_name
        self.timeout_seconds = timeout_seconds

    async def send_otp(
        self, *, email: str, code: str, expires_minutes: int
    ) -> Result[None, MailError]:
        """Send a one-time login code.

        Args:
            email: Recipient address.
            code: 6-digit code.
            expires_minutes: Lifetime quoted in the message.

        Returns:
            Success(None), or Failure(MailError) when the server rejected
            the message, could not be reached or timed out.
        """
        recipient = mask_email(email)
        host = self.smtp_host

        if not host:
            self._logger.info(
                "SMTP not configured, one-time code not mailed",
                recipient=recipient,
                expires_minutes=expires_minutes,
            )
            return Success(value=None)

        message = self._build_otp_message(email, code, expires_minutes)

        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._deliver, host, email, message),
                timeout=self.timeout_seconds,
            )
        except TimeoutError:
            self._logger.warning(
                "SMTP delivery timed out",
                recipient=recipient,
                timeout_seconds=self.timeout_seconds,
            )
            return Failure(
                error=MailError(
                    code=ErrorCode.MAIL_DISPATCH_FAILED,
                    message="SMTP delivery timed out",
                    recipient=recipient,
                )
            )
        except (smtplib.SMTPException, OSError) as e:
            self._logger.error(
                "SMTP delivery failed",
                error=e,
                recipient=recipient,
                host=self.smtp_host,
                port=self.smtp_port,
            )
            return Failure(
                error=MailError(
                    code=ErrorCode.MAIL_DISPATCH_FAILED,
                    message=f"SMTP delivery failed: {type(e).__name__}",
                    recipient=recipient,
                    details={"error_type": type(e).__name__},
                )
            )

        self._logger.info("One-time code mailed", recipient=recipient)
        return Success(value=None)

    def _build_otp_message(self, email: str, code: str, expires_minutes: int) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = OTP_SUBJECT
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = email

        text_body = (
            f"Your verification code is {code}.\n\n"
            f"The code is valid for {expires_minutes} minutes and can be used once.\n"
            "If you did not try to sign in, you can ignore this message."
        )
        html_body = (
            "<p>Your verification code is:</p>"
            f'<p style="font-size:24px;font-weight:bold;letter-spacing:4px">{code}</p>'
            f"<p>The code is valid for {expires_minutes} minutes and can be used once.</p>"
            "<p>If you did not try to sign in, you can ignore this message.</p>"
        )
        message.attach(MIMEText(text_body, "plain", "utf-8"))
        message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def _deliver(self, host: str, email: str, message: MIMEMultipart) -> None:
        """Blocking SMTP conversation (runs in a worker thread)."""
        context = ssl.create_default_context()

        match self.smtp_security:
            case SmtpSecurity.SSL:
                with smtplib.SMTP_SSL(
                    host, self.smtp_port, context=context, timeout=self.timeout_seconds
                ) as server:
                    self._login_and_send(server, email, message)
            case SmtpSecurity.STARTTLS:
                with smtplib.SMTP(
                    host, self.smtp_port, timeout=self.timeout_seconds
                ) as server:
                    server.starttls(context=context)
                    self._login_and_send(server, email, message)
            case SmtpSecurity.NONE:
                with smtplib.SMTP(
                    host, self.smtp_port, timeout=self.timeout_seconds
                ) as server:
                    self._login_and_send(server, email, message)

    def _login_and_send(
        self, server: smtplib.SMTP, email: str, message: MIMEMultipart
    ) -> None:
        if self.smtp_username and self.smtp_password:
            server.login(self.smtp_username, self.smtp_password)
        server.sendmail(self.from_email, [email], message.as_string())
