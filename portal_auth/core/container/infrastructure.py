"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Database (SQLAlchemy async engine)
- Password hashing (bcrypt) and the credential verifier decoy
- Token generation (JWT access tokens, opaque refresh tokens)
- Mail (SMTP, logged in development)

Request-scoped dependencies (sessions, audit adapter) are async generators
consumed through FastAPI ``Depends``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal_auth.core.config import settings
from portal_auth.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from portal_auth.application.services import CredentialVerifier
    from portal_auth.domain.protocols import (
        AuditProtocol,
        LoggerProtocol,
        MailDispatcherProtocol,
        PasswordHashingProtocol,
        RefreshTokenServiceProtocol,
        TokenGenerationProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: human-readable console output
    - testing/ci/production: JSON lines on stdout

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from portal_auth.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(use_json=not settings.is_development, level=settings.log_level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


async def get_audit_session() -> AsyncGenerator[AsyncSession, None]:
    """Get audit session (request-scoped, independent lifecycle).

    Separate from get_db_session() so audit entries are committed on their
    own and survive a rolled back request.

    Yields:
        Database session for audit operations only.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


async def get_audit(
    audit_session: AsyncSession = Depends(get_audit_session),
) -> "AuditProtocol":
    """Get audit adapter bound to the separate audit session.

    Args:
        audit_session: Independent database session for audit operations.

    Returns:
        Audit adapter implementing AuditProtocol.
    """
    from portal_auth.infrastructure.audit.postgres_adapter import PostgresAuditAdapter

    return PostgresAuditAdapter(session=audit_session)


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get bcrypt password service singleton with the configured cost factor."""
    from portal_auth.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_credential_verifier() -> "CredentialVerifier":
    """Get credential verifier singleton.

    The decoy hash is generated on first call (the application lifespan
    warms it) and reused for the life of the process.
    """
    from portal_auth.application.services import CredentialVerifier

    return CredentialVerifier.with_generated_decoy(get_password_service())


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT access token service singleton."""
    from portal_auth.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get opaque refresh token service singleton."""
    from portal_auth.infrastructure.security import RefreshTokenService

    return RefreshTokenService(expiration_days=settings.refresh_token_expire_days)


# ============================================================================
# Mail (Application-Scoped)
# ============================================================================


@lru_cache()
def get_mail_dispatcher() -> "MailDispatcherProtocol":
    """Get mail dispatcher singleton.

    Without SMTP_HOST the dispatcher logs each message instead of sending
    it, which is what development and test environments rely on.
    """
    from portal_auth.infrastructure.email import SmtpMailDispatcher

    return SmtpMailDispatcher(
        logger=get_logger(),
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
        smtp_username=settings.smtp_username,
        smtp_password=settings.smtp_password,
        smtp_security=settings.smtp_security,
        from_email=settings.smtp_from_email,
        from_name=settings.smtp_from_name,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
