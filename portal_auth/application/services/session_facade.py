"""Session facade: password login, one-time-code completion, renewal, logout.

The only entry point the HTTP layer calls. Orchestrates:

    LoginThrottle -> AccountRepository -> CredentialVerifier
        -> lockout bookkeeping -> (OtpChallenge + mail) -> PermissionResolver
        -> TokenIssuer -> AuditSink

States of a password login:

    Started -> Throttled        (reported as CredentialInvalid)
            -> CredentialInvalid
            -> AccountLocked
            -> OtpRequired      (pause until VerifyOtpAndLogin)
            -> Authenticated

Store failures propagate and fail the current request. Audit and mail
results are inspected and, when they are failures, logged and dropped.
One-time codes are mailed in a background task, so a slow or unreachable
mail server never delays the OtpRequired response.
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from portal_auth.application.commands import (
    LoginUser,
    LogoutUser,
    RefreshSession,
    RequestContext,
    VerifyOtpAndLogin,
)
from portal_auth.application.dtos import (
    AccountLocked,
    Authenticated,
    CredentialInvalid,
    LoginOutcome,
    OtpInvalid,
    OtpLoginOutcome,
    OtpRequired,
    RefreshInvalid,
    RefreshOutcome,
)
from portal_auth.application.services.credential_verifier import CredentialVerifier
from portal_auth.application.services.login_throttle import LoginThrottle
from portal_auth.application.services.otp_challenge import OtpChallenge
from portal_auth.application.services.token_issuer import TokenIssuer
from portal_auth.core.enums import ErrorCode
from portal_auth.core.result import Failure, Success
from portal_auth.domain.entities import Account
from portal_auth.domain.enums import AuditAction, AuditStatus, OtpPurpose
from portal_auth.domain.errors import FailureReason
from portal_auth.domain.policies import mask_email
from portal_auth.domain.protocols import (
    AccountRepository,
    AuditProtocol,
    LoggerProtocol,
    MailDispatcherProtocol,
    PermissionResolverProtocol,
)


# In-flight code deliveries; a task must stay referenced until it finishes.
_pending_deliveries: set[asyncio.Task[None]] = set()


async def drain_pending_deliveries(timeout: float | None = None) -> None:
    """Wait for one-time code deliveries still in flight.

    Called on application shutdown and by tests that inspect the mailer.
    """
    if _pending_deliveries:
        await asyncio.wait(set(_pending_deliveries), timeout=timeout)


class SessionFacade:
    """Orchestrates the authentication flows.

    Dependencies (injected):
        - throttle: per-IP attempt throttle
        - accounts: credential store and login bookkeeping
        - verifier: constant-cost password check
        - otp: one-time code issue/verify
        - mail: one-time code delivery
        - permissions: role/permission lookup
        - issuer: token minting and refresh redemption
        - audit: best-effort audit sink
        - logger: structured logger

    Usage:
        match await facade.login(LoginUser(identifier=..., password=..., context=ctx)):
            case Authenticated(tokens=tokens):
                ...
    """

    def __init__(
        self,
        *,
        throttle: LoginThrottle,
        accounts: AccountRepository,
        verifier: CredentialVerifier,
        otp: OtpChallenge,
        mail: MailDispatcherProtocol,
        permissions: PermissionResolverProtocol,
        issuer: TokenIssuer,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        require_otp: bool = False,
    ) -> None:
        """Initialize facade.

        Args:
            throttle: Per-IP attempt throttle.
            accounts: Account repository.
            verifier: Credential verifier.
            otp: One-time code service.
            mail: Mail dispatcher.
            permissions: Permission resolver.
            issuer: Token issuer.
            audit: Audit sink.
            logger: Structured logger.
            require_otp: Require a one-time code for every account, not only
                those with ``otp_enabled``.
        """
        self._throttle = throttle
        self._accounts = accounts
        self._verifier = verifier
        self._otp = otp
        self._mail = mail
        self._permissions = permissions
        self._issuer = issuer
        self._audit = audit
        self._logger = logger
        self._require_otp = require_otp

    async def login(self, cmd: LoginUser) -> LoginOutcome:
        """Authenticate with username-or-email and password.

        Args:
            cmd: LoginUser command.

        Returns:
            Authenticated, OtpRequired, AccountLocked or CredentialInvalid.
        """
        ctx = cmd.context
        identifier = cmd.identifier.strip()
        action = AuditAction.LOGIN_ATTEMPT

        # Step 1: Record the attempt, then apply the per-IP throttle
        if not await self._throttle.register(
            ctx.ip_address, identifier=identifier, user_agent=ctx.user_agent
        ):
            self._logger.warning("Login throttled", ip_address=ctx.ip_address)
            await self._record(
                action, AuditStatus.FAILED, FailureReason.RATE_LIMITED, identifier, ctx
            )
            return CredentialInvalid()

        # Step 2: Look up the account and ALWAYS run the hash comparison
        account = await self._accounts.find_by_username_or_email(identifier)
        password_ok = await self._verifier.verify(cmd.password, account)

        # Step 3: Unknown identifier or wrong password
        if account is None:
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.UNKNOWN_IDENTIFIER,
                identifier,
                ctx,
            )
            return CredentialInvalid()

        if not password_ok:
            state = await self._accounts.record_failed_login(
                account.id, now=datetime.now(UTC)
            )
            context: dict[str, Any] | None = None
            if state is not None:
                context = {"failed_login_attempts": state.failed_login_attempts}
                if state.locked_until is not None:
                    context["locked_until"] = state.locked_until.isoformat()
                    self._logger.warning(
                        "Account locked after failed logins",
                        account_id=account.id,
                        failed_login_attempts=state.failed_login_attempts,
                        locked_until=state.locked_until.isoformat(),
                    )
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.INVALID_PASSWORD,
                identifier,
                ctx,
                account=account,
                context=context,
            )
            return CredentialInvalid()

        # Steps 4-6: Deactivated, locked out, wrong tenant
        rejection = await self._check_account_state(account, identifier, ctx, action)
        if rejection is not None:
            return rejection

        # Step 7: Second factor
        if self._require_otp or account.otp_enabled:
            return await self._start_otp_challenge(account, identifier, ctx)

        # Step 8: Complete the login
        return await self._complete_login(account, identifier, ctx, action)

    async def verify_otp_and_login(self, cmd: VerifyOtpAndLogin) -> OtpLoginOutcome:
        """Finish a login with the emailed one-time code.

        Failed codes do not touch the password failure counter.

        Args:
            cmd: VerifyOtpAndLogin command.

        Returns:
            Authenticated, AccountLocked or OtpInvalid.
        """
        ctx = cmd.context
        identifier = cmd.identifier.strip()
        action = AuditAction.OTP_VERIFICATION

        # Step 1: Record the attempt, then apply the per-IP throttle
        if not await self._throttle.register(
            ctx.ip_address, identifier=identifier, user_agent=ctx.user_agent
        ):
            self._logger.warning("OTP verification throttled", ip_address=ctx.ip_address)
            await self._record(
                action, AuditStatus.FAILED, FailureReason.RATE_LIMITED, identifier, ctx
            )
            return OtpInvalid()

        # Step 2: Re-resolve the account, then consume the code
        account = await self._accounts.find_by_username_or_email(identifier)
        if account is None or not await self._otp.verify(
            account.email, cmd.code, OtpPurpose.LOGIN
        ):
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.INVALID_OTP,
                identifier,
                ctx,
                account=account,
            )
            return OtpInvalid()

        # Step 3: Account state may have changed since the password step
        rejection = await self._check_account_state(account, identifier, ctx, action)
        match rejection:
            case None:
                pass
            case AccountLocked():
                return rejection
            case _:
                return OtpInvalid()

        # Step 4: Complete the login
        return await self._complete_login(account, identifier, ctx, action)

    async def refresh(self, cmd: RefreshSession) -> RefreshOutcome:
        """Rotate the refresh token and mint a new token pair.

        Args:
            cmd: RefreshSession command.

        Returns:
            Authenticated with the new pair, or RefreshInvalid. On
            RefreshInvalid the caller must clear the session cookies.
        """
        ctx = cmd.context
        action = AuditAction.TOKEN_REFRESH

        if not cmd.refresh_token:
            return RefreshInvalid(code=ErrorCode.NO_REFRESH_TOKEN)

        now = datetime.now(UTC)
        match await self._issuer.redeem(cmd.refresh_token, now=now):
            case Success(value=account_id):
                pass
            case Failure(error=reason):
                self._logger.info("Refresh token rejected", reason=reason)
                await self._record(action, AuditStatus.FAILED, reason, None, ctx)
                return RefreshInvalid(code=ErrorCode.INVALID_REFRESH_TOKEN)

        account = await self._accounts.find_by_id(account_id)
        if account is None or not account.is_active:
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.REFRESH_ACCOUNT_UNAVAILABLE,
                None,
                ctx,
                account=account,
                context={"account_id": account_id},
            )
            return RefreshInvalid(code=ErrorCode.INVALID_REFRESH_TOKEN)

        grants = await self._permissions.resolve(account.id, account.tenant_id)
        tokens = await self._issuer.issue_tokens(account, grants, now=now)

        await self._record(
            action,
            AuditStatus.SUCCESS,
            FailureReason.ROTATED,
            account.username,
            ctx,
            account=account,
        )
        return Authenticated(tokens=tokens)

    async def logout(self, cmd: LogoutUser) -> None:
        """Revoke the presented refresh token, if any.

        Logging out without a token, or with an unknown or already revoked
        token, still succeeds.
        """
        if not cmd.refresh_token:
            return

        revoked = await self._issuer.revoke(cmd.refresh_token)
        await self._record(
            AuditAction.LOGOUT,
            AuditStatus.SUCCESS,
            FailureReason.LOGGED_OUT,
            None,
            cmd.context,
            context={"token_revoked": revoked},
        )

    async def _check_account_state(
        self,
        account: Account,
        identifier: str,
        ctx: RequestContext,
        action: AuditAction,
    ) -> AccountLocked | CredentialInvalid | None:
        """Apply the deactivation, lockout and tenant checks in that order."""
        if not account.is_active:
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.ACCOUNT_INACTIVE,
                identifier,
                ctx,
                account=account,
            )
            return CredentialInvalid()

        if account.is_locked() and account.locked_until is not None:
            await self._record(
                action,
                AuditStatus.LOCKED,
                FailureReason.ACCOUNT_LOCKED,
                identifier,
                ctx,
                account=account,
                context={"locked_until": account.locked_until.isoformat()},
            )
            return AccountLocked(locked_until=account.locked_until)

        if not account.belongs_to_tenant(ctx.tenant_id):
            await self._record(
                action,
                AuditStatus.FAILED,
                FailureReason.TENANT_MISMATCH,
                identifier,
                ctx,
                account=account,
                context={"request_tenant_id": ctx.tenant_id},
            )
            return CredentialInvalid()

        return None

    async def _start_otp_challenge(
        self, account: Account, identifier: str, ctx: RequestContext
    ) -> OtpRequired:
        """Issue a login code, schedule its delivery, pause the login."""
        code = await self._otp.issue(account.email, OtpPurpose.LOGIN)
        masked = mask_email(account.email)

        task = asyncio.create_task(self._deliver_code(account, code, masked))
        _pending_deliveries.add(task)
        task.add_done_callback(_pending_deliveries.discard)

        await self._record(
            AuditAction.LOGIN_ATTEMPT,
            AuditStatus.OTP_REQUIRED,
            FailureReason.OTP_SENT,
            identifier,
            ctx,
            account=account,
        )
        return OtpRequired(masked_email=masked)

    async def _deliver_code(self, account: Account, code: str, masked: str) -> None:
        match await self._mail.send_otp(
            email=account.email, code=code, expires_minutes=self._otp.ttl_minutes
        ):
            case Success():
                pass
            case Failure(error=error):
                # Code stays valid; the user can request a new login
                self._logger.warning(
                    "One-time code delivery failed",
                    account_id=account.id,
                    recipient=masked,
                    error_code=error.code.value,
                    error_message=error.message,
                )

    async def _complete_login(
        self,
        account: Account,
        identifier: str,
        ctx: RequestContext,
        action: AuditAction,
    ) -> Authenticated:
        """Reset bookkeeping, resolve grants, mint tokens, audit."""
        now = datetime.now(UTC)
        await self._accounts.record_successful_login(account.id, now=now)

        grants = await self._permissions.resolve(account.id, account.tenant_id)
        tokens = await self._issuer.issue_tokens(account, grants, now=now)

        await self._record(
            action,
            AuditStatus.SUCCESS,
            FailureReason.AUTHENTICATED,
            identifier,
            ctx,
            account=account,
            context={"roles": list(grants.roles)},
        )
        self._logger.info(
            "Login succeeded",
            account_id=account.id,
            tenant_id=account.tenant_id,
            method=action.value,
        )
        return Authenticated(tokens=tokens)

    async def _record(
        self,
        action: AuditAction,
        status: AuditStatus,
        reason: str,
        identity: str | None,
        ctx: RequestContext,
        *,
        account: Account | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Write an audit entry; a failed write is logged and dropped."""
        result = await self._audit.record(
            action=action,
            status=status,
            reason=reason,
            identity=identity,
            account_id=account.id if account is not None else None,
            tenant_id=account.tenant_id if account is not None else ctx.tenant_id,
            ip_address=ctx.ip_address,
            user_agent=ctx.user_agent,
            context=context,
        )
        match result:
            case Success():
                pass
            case Failure(error=error):
                self._logger.warning(
                    "Audit record dropped",
                    action=action.value,
                    error_code=error.code.value,
                    error_message=error.message,
                )
