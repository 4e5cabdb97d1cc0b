"""Unit tests for SessionFacade.

Tests cover:
- Password login: success, unknown identifier, wrong password, lockout,
  deactivated account, tenant mismatch, throttling
- Second factor: code issued and mailed in the background, mail failure
  and slow mail tolerated
- OTP completion: success, invalid code, locked account
- Refresh: missing token, rejected token, unavailable account, rotation
- Logout with and without a token
- Audit failures never change an outcome

Architecture:
- Collaborators are mocks; the facade's ordering and branching is under test
"""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest

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
    IssuedTokens,
    OtpInvalid,
    OtpRequired,
    RefreshInvalid,
)
from portal_auth.application.services import SessionFacade, drain_pending_deliveries
from portal_auth.core.enums import ErrorCode
from portal_auth.core.result import Failure, Success
from portal_auth.domain.entities import AccessGrants, Account
from portal_auth.domain.enums import AuditAction, AuditStatus, OtpPurpose
from portal_auth.domain.errors import AuditError, FailureReason, MailError
from portal_auth.domain.protocols import LockoutState

CONTEXT = RequestContext(ip_address="203.0.113.9", user_agent="pytest")


def create_account(**overrides) -> Account:
    values = {
        "id": 7,
        "tenant_id": None,
        "username": "alice",
        "email": "alice@example.com",
        "password_hash": "$2b$10$hash",
    }
    values.update(overrides)
    return Account(**values)


def create_tokens(account_id: int = 7) -> IssuedTokens:
    now = datetime.now(UTC)
    return IssuedTokens(
        access_token="access.jwt.token",
        access_expires_at=now + timedelta(minutes=30),
        refresh_token="opaque-refresh",
        refresh_expires_at=now + timedelta(days=7),
        account_id=account_id,
        username="alice",
        tenant_id=None,
    )


class FacadeMocks:
    """Bundle of mocked collaborators with happy-path defaults."""

    def __init__(self, account: Account | None) -> None:
        self.throttle = AsyncMock()
        self.throttle.register.return_value = True

        self.accounts = AsyncMock()
        self.accounts.find_by_username_or_email.return_value = account
        self.accounts.find_by_id.return_value = account
        self.accounts.record_failed_login.return_value = LockoutState(
            failed_login_attempts=1, locked_until=None
        )

        self.verifier = AsyncMock()
        self.verifier.verify.return_value = True

        self.otp = AsyncMock()
        self.otp.issue.return_value = "123456"
        self.otp.verify.return_value = True
        self.otp.ttl_minutes = 5

        self.mail = AsyncMock()
        self.mail.send_otp.return_value = Success(value=None)

        self.permissions = AsyncMock()
        self.permissions.resolve.return_value = AccessGrants(
            roles=("editor",), permissions=("news.publish",)
        )

        self.issuer = AsyncMock()
        self.issuer.issue_tokens.return_value = create_tokens()
        self.issuer.redeem.return_value = Success(value=7)
        self.issuer.revoke.return_value = True

        self.audit = AsyncMock()
        self.audit.record.return_value = Success(value=None)

        self.logger = Mock()

    def facade(self, *, require_otp: bool = False) -> SessionFacade:
        return SessionFacade(
            throttle=self.throttle,
            accounts=self.accounts,
            verifier=self.verifier,
            otp=self.otp,
            mail=self.mail,
            permissions=self.permissions,
            issuer=self.issuer,
            audit=self.audit,
            logger=self.logger,
            require_otp=require_otp,
        )

    def last_audit(self) -> dict:
        return self.audit.record.call_args.kwargs


def login_command(identifier: str = "alice", password: str = "pw") -> LoginUser:
    return LoginUser(identifier=identifier, password=password, context=CONTEXT)


# =============================================================================
# Password login
# =============================================================================


@pytest.mark.unit
class TestLoginSuccess:
    """Test successful password logins."""

    async def test_returns_tokens_and_resets_bookkeeping(self):
        account = create_account()
        mocks = FacadeMocks(account)

        outcome = await mocks.facade().login(login_command())

        assert isinstance(outcome, Authenticated)
        assert outcome.tokens.access_token == "access.jwt.token"
        mocks.accounts.record_successful_login.assert_awaited_once()
        assert mocks.accounts.record_successful_login.call_args.args == (7,)
        mocks.permissions.resolve.assert_awaited_once_with(7, None)
        mocks.issuer.issue_tokens.assert_awaited_once()
        mocks.accounts.record_failed_login.assert_not_awaited()

    async def test_audits_success_with_roles(self):
        mocks = FacadeMocks(create_account())

        await mocks.facade().login(login_command())

        audit = mocks.last_audit()
        assert audit["action"] is AuditAction.LOGIN_ATTEMPT
        assert audit["status"] is AuditStatus.SUCCESS
        assert audit["reason"] == FailureReason.AUTHENTICATED
        assert audit["account_id"] == 7
        assert audit["ip_address"] == "203.0.113.9"
        assert audit["context"] == {"roles": ["editor"]}

    async def test_identifier_is_trimmed(self):
        mocks = FacadeMocks(create_account())

        await mocks.facade().login(login_command(identifier="  alice  "))

        mocks.accounts.find_by_username_or_email.assert_awaited_once_with("alice")
        assert mocks.throttle.register.call_args.kwargs["identifier"] == "alice"

    async def test_audit_failure_does_not_change_outcome(self):
        mocks = FacadeMocks(create_account())
        mocks.audit.record.return_value = Failure(
            error=AuditError(code=ErrorCode.AUDIT_RECORD_FAILED, message="db down")
        )

        outcome = await mocks.facade().login(login_command())

        assert isinstance(outcome, Authenticated)
        mocks.logger.warning.assert_called()
        assert mocks.logger.warning.call_args.args[0] == "Audit record dropped"


@pytest.mark.unit
class TestLoginRejections:
    """Test rejected password logins."""

    async def test_unknown_identifier_still_runs_hash_comparison(self):
        mocks = FacadeMocks(None)
        mocks.verifier.verify.return_value = False

        outcome = await mocks.facade().login(login_command(identifier="ghost"))

        assert outcome == CredentialInvalid()
        mocks.verifier.verify.assert_awaited_once_with("pw", None)
        mocks.accounts.record_failed_login.assert_not_awaited()
        assert mocks.last_audit()["reason"] == FailureReason.UNKNOWN_IDENTIFIER
        assert mocks.last_audit()["account_id"] is None

    async def test_wrong_password_increments_counter(self):
        mocks = FacadeMocks(create_account())
        mocks.verifier.verify.return_value = False
        mocks.accounts.record_failed_login.return_value = LockoutState(
            failed_login_attempts=3, locked_until=None
        )

        outcome = await mocks.facade().login(login_command())

        assert outcome == CredentialInvalid()
        mocks.accounts.record_failed_login.assert_awaited_once()
        audit = mocks.last_audit()
        assert audit["reason"] == FailureReason.INVALID_PASSWORD
        assert audit["context"] == {"failed_login_attempts": 3}
        mocks.issuer.issue_tokens.assert_not_awaited()

    async def test_failure_that_triggers_lockout_is_still_generic(self):
        """The failure that locks the account is reported as invalid credentials."""
        until = datetime.now(UTC) + timedelta(minutes=15)
        mocks = FacadeMocks(create_account())
        mocks.verifier.verify.return_value = False
        mocks.accounts.record_failed_login.return_value = LockoutState(
            failed_login_attempts=5, locked_until=until
        )

        outcome = await mocks.facade().login(login_command())

        assert outcome == CredentialInvalid()
        assert mocks.last_audit()["context"]["locked_until"] == until.isoformat()

    async def test_locked_account_with_correct_password(self):
        until = datetime.now(UTC) + timedelta(minutes=10)
        mocks = FacadeMocks(create_account(locked_until=until, failed_login_attempts=5))

        outcome = await mocks.facade().login(login_command())

        assert outcome == AccountLocked(locked_until=until)
        assert mocks.last_audit()["status"] is AuditStatus.LOCKED
        mocks.accounts.record_successful_login.assert_not_awaited()

    async def test_expired_lock_does_not_block(self):
        until = datetime.now(UTC) - timedelta(minutes=1)
        mocks = FacadeMocks(create_account(locked_until=until, failed_login_attempts=5))

        outcome = await mocks.facade().login(login_command())

        assert isinstance(outcome, Authenticated)
        mocks.accounts.record_successful_login.assert_awaited_once()

    async def test_locked_account_with_wrong_password_is_generic(self):
        until = datetime.now(UTC) + timedelta(minutes=10)
        mocks = FacadeMocks(create_account(locked_until=until))
        mocks.verifier.verify.return_value = False

        outcome = await mocks.facade().login(login_command())

        assert outcome == CredentialInvalid()

    async def test_inactive_account(self):
        mocks = FacadeMocks(create_account(is_active=False))

        outcome = await mocks.facade().login(login_command())

        assert outcome == CredentialInvalid()
        assert mocks.last_audit()["reason"] == FailureReason.ACCOUNT_INACTIVE
        mocks.issuer.issue_tokens.assert_not_awaited()

    async def test_tenant_mismatch(self):
        mocks = FacadeMocks(create_account(tenant_id=4))
        context = RequestContext(ip_address="203.0.113.9", tenant_id=3)

        outcome = await mocks.facade().login(
            LoginUser(identifier="alice", password="pw", context=context)
        )

        assert outcome == CredentialInvalid()
        assert mocks.last_audit()["reason"] == FailureReason.TENANT_MISMATCH
        assert mocks.last_audit()["context"] == {"request_tenant_id": 3}

    async def test_throttled_attempt_skips_credential_check(self):
        mocks = FacadeMocks(create_account())
        mocks.throttle.register.return_value = False

        outcome = await mocks.facade().login(login_command())

        assert outcome == CredentialInvalid()
        mocks.accounts.find_by_username_or_email.assert_not_awaited()
        mocks.verifier.verify.assert_not_awaited()
        assert mocks.last_audit()["reason"] == FailureReason.RATE_LIMITED


# =============================================================================
# Second factor
# =============================================================================


@pytest.mark.unit
class TestLoginOtpChallenge:
    """Test logins paused for a one-time code."""

    async def test_otp_enabled_account_gets_code(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))

        outcome = await mocks.facade().login(login_command())
        await drain_pending_deliveries()

        assert outcome == OtpRequired(masked_email="ali**@example.com")
        mocks.otp.issue.assert_awaited_once_with("alice@example.com", OtpPurpose.LOGIN)
        mocks.mail.send_otp.assert_awaited_once_with(
            email="alice@example.com", code="123456", expires_minutes=5
        )
        mocks.issuer.issue_tokens.assert_not_awaited()
        mocks.accounts.record_successful_login.assert_not_awaited()
        assert mocks.last_audit()["status"] is AuditStatus.OTP_REQUIRED

    async def test_global_switch_requires_otp_for_everyone(self):
        mocks = FacadeMocks(create_account(otp_enabled=False))

        outcome = await mocks.facade(require_otp=True).login(login_command())
        await drain_pending_deliveries()

        assert isinstance(outcome, OtpRequired)

    async def test_mail_failure_is_logged_not_raised(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))
        mocks.mail.send_otp.return_value = Failure(
            error=MailError(code=ErrorCode.MAIL_DISPATCH_FAILED, message="timeout")
        )

        outcome = await mocks.facade().login(login_command())
        await drain_pending_deliveries()

        assert isinstance(outcome, OtpRequired)
        logged = [call.args[0] for call in mocks.logger.warning.call_args_list]
        assert "One-time code delivery failed" in logged

    async def test_slow_mail_does_not_delay_response(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))
        release = asyncio.Event()

        async def hanging_send(**kwargs):
            await release.wait()
            return Success(value=None)

        mocks.mail.send_otp.side_effect = hanging_send

        outcome = await asyncio.wait_for(mocks.facade().login(login_command()), 1)

        assert isinstance(outcome, OtpRequired)
        assert mocks.last_audit()["status"] is AuditStatus.OTP_REQUIRED
        release.set()
        await drain_pending_deliveries()
        mocks.mail.send_otp.assert_awaited_once()

    async def test_code_never_reaches_audit_or_logs(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))

        await mocks.facade().login(login_command())
        await drain_pending_deliveries()

        for call in mocks.audit.record.call_args_list:
            assert "123456" not in repr(call)
        for method in (mocks.logger.info, mocks.logger.warning):
            for call in method.call_args_list:
                assert "123456" not in repr(call)


@pytest.mark.unit
class TestVerifyOtpAndLogin:
    """Test completing a paused login."""

    def command(self, code: str = "123456") -> VerifyOtpAndLogin:
        return VerifyOtpAndLogin(identifier="alice", code=code, context=CONTEXT)

    async def test_valid_code_authenticates(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))

        outcome = await mocks.facade().verify_otp_and_login(self.command())

        assert isinstance(outcome, Authenticated)
        mocks.otp.verify.assert_awaited_once_with(
            "alice@example.com", "123456", OtpPurpose.LOGIN
        )
        assert mocks.last_audit()["action"] is AuditAction.OTP_VERIFICATION
        mocks.accounts.record_successful_login.assert_awaited_once()

    async def test_invalid_code(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))
        mocks.otp.verify.return_value = False

        outcome = await mocks.facade().verify_otp_and_login(self.command("000000"))

        assert outcome == OtpInvalid()
        assert mocks.last_audit()["reason"] == FailureReason.INVALID_OTP
        mocks.issuer.issue_tokens.assert_not_awaited()

    async def test_invalid_code_does_not_touch_failure_counter(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))
        mocks.otp.verify.return_value = False

        await mocks.facade().verify_otp_and_login(self.command("000000"))

        mocks.accounts.record_failed_login.assert_not_awaited()

    async def test_unknown_identifier(self):
        mocks = FacadeMocks(None)

        outcome = await mocks.facade().verify_otp_and_login(self.command())

        assert outcome == OtpInvalid()
        mocks.otp.verify.assert_not_awaited()

    async def test_account_locked_since_password_step(self):
        until = datetime.now(UTC) + timedelta(minutes=15)
        mocks = FacadeMocks(create_account(otp_enabled=True, locked_until=until))

        outcome = await mocks.facade().verify_otp_and_login(self.command())

        assert outcome == AccountLocked(locked_until=until)

    async def test_account_deactivated_since_password_step(self):
        mocks = FacadeMocks(create_account(otp_enabled=True, is_active=False))

        outcome = await mocks.facade().verify_otp_and_login(self.command())

        assert outcome == OtpInvalid()

    async def test_throttled(self):
        mocks = FacadeMocks(create_account(otp_enabled=True))
        mocks.throttle.register.return_value = False

        outcome = await mocks.facade().verify_otp_and_login(self.command())

        assert outcome == OtpInvalid()
        mocks.otp.verify.assert_not_awaited()


# =============================================================================
# Refresh and logout
# =============================================================================


@pytest.mark.unit
class TestRefresh:
    """Test refresh token renewal."""

    async def test_missing_token(self):
        mocks = FacadeMocks(create_account())

        outcome = await mocks.facade().refresh(
            RefreshSession(refresh_token=None, context=CONTEXT)
        )

        assert outcome == RefreshInvalid(code=ErrorCode.NO_REFRESH_TOKEN)
        mocks.issuer.redeem.assert_not_awaited()

    async def test_rejected_token(self):
        mocks = FacadeMocks(create_account())
        mocks.issuer.redeem.return_value = Failure(error=FailureReason.REFRESH_REVOKED)

        outcome = await mocks.facade().refresh(
            RefreshSession(refresh_token="replayed", context=CONTEXT)
        )

        assert outcome == RefreshInvalid(code=ErrorCode.INVALID_REFRESH_TOKEN)
        assert mocks.last_audit()["reason"] == FailureReason.REFRESH_REVOKED
        mocks.issuer.issue_tokens.assert_not_awaited()

    async def test_deactivated_account(self):
        mocks = FacadeMocks(create_account(is_active=False))

        outcome = await mocks.facade().refresh(
            RefreshSession(refresh_token="opaque", context=CONTEXT)
        )

        assert outcome == RefreshInvalid(code=ErrorCode.INVALID_REFRESH_TOKEN)
        assert mocks.last_audit()["reason"] == FailureReason.REFRESH_ACCOUNT_UNAVAILABLE

    async def test_rotation_mints_new_pair_with_fresh_grants(self):
        mocks = FacadeMocks(create_account())

        outcome = await mocks.facade().refresh(
            RefreshSession(refresh_token="opaque", context=CONTEXT)
        )

        assert isinstance(outcome, Authenticated)
        mocks.issuer.redeem.assert_awaited_once()
        mocks.permissions.resolve.assert_awaited_once_with(7, None)
        assert mocks.last_audit()["reason"] == FailureReason.ROTATED


@pytest.mark.unit
class TestLogout:
    """Test logout."""

    async def test_without_token_does_nothing(self):
        mocks = FacadeMocks(create_account())

        await mocks.facade().logout(LogoutUser(refresh_token=None, context=CONTEXT))

        mocks.issuer.revoke.assert_not_awaited()
        mocks.audit.record.assert_not_awaited()

    async def test_revokes_token(self):
        mocks = FacadeMocks(create_account())

        await mocks.facade().logout(LogoutUser(refresh_token="opaque", context=CONTEXT))

        mocks.issuer.revoke.assert_awaited_once_with("opaque")
        audit = mocks.last_audit()
        assert audit["action"] is AuditAction.LOGOUT
        assert audit["context"] == {"token_revoked": True}
