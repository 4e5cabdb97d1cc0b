"""Domain entities.

Usage:
    from portal_auth.domain.entities import Account, LoginAttempt
"""

from portal_auth.domain.entities.access_grants import AccessGrants
from portal_auth.domain.entities.account import Account
from portal_auth.domain.entities.login_attempt import LoginAttempt
from portal_auth.domain.entities.session_claims import SessionClaims

__all__ = ["AccessGrants", "Account", "LoginAttempt", "SessionClaims"]
