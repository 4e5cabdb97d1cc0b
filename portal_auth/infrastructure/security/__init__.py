"""Security adapters: password hashing, access tokens, refresh tokens."""

from portal_auth.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from portal_auth.infrastructure.security.jwt_service import JWTService
from portal_auth.infrastructure.security.refresh_token_service import (
    RefreshTokenService,
)

__all__ = ["BcryptPasswordService", "JWTService", "RefreshTokenService"]
