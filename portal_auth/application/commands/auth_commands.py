"""Authentication commands.

Commands represent user intent. They are immutable (frozen=True), use
keyword-only arguments and carry no logic; the SessionFacade executes them
and returns an explicit outcome value.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class RequestContext:
    """Where a request came from.

    Attributes:
        ip_address: Socket peer address ("unknown" when absent).
        user_agent: Client User-Agent header.
        tenant_id: Tenant derived from the request host. When set, only
            accounts of that tenant may authenticate.
    """

    ip_address: str
    user_agent: str | None = None
    tenant_id: int | None = None


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Password login.

    Attributes:
        identifier: Username or email.
        password: Plaintext password (never logged).
        context: Request origin.

    Example:
        >>> command = LoginUser(
        ...     identifier="alice",
        ...     password="correct horse battery staple",
        ...     context=RequestContext(ip_address="203.0.113.9"),
        ... )
        >>> outcome = await facade.login(command)
    """

    identifier: str
    password: str
    context: RequestContext


@dataclass(frozen=True, kw_only=True)
class VerifyOtpAndLogin:
    """Second step of a login that required a one-time code.

    Attributes:
        identifier: Username or email used in the first step.
        code: 6-digit code from the email.
        context: Request origin.
    """

    identifier: str
    code: str
    context: RequestContext


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Renew the access token with a refresh token.

    Attributes:
        refresh_token: Raw token from the refresh cookie, None if absent.
        context: Request origin.
    """

    refresh_token: str | None
    context: RequestContext


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End the current session.

    Attributes:
        refresh_token: Raw token from the refresh cookie, None if absent.
        context: Request origin.
    """

    refresh_token: str | None
    context: RequestContext
