"""Claims carried by an access token."""

from dataclasses import dataclass, field

# Permission granting every administrative capability
MANAGE_ALL = "manage_all"


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionClaims:
    """Identity decoded from a valid access token.

    Attributes:
        account_id: Subject of the token.
        username: Login name at mint time.
        tenant_id: Tenant of the account, None for platform accounts.
        roles: Role names held at mint time.
        permissions: Permission names held at mint time.
        token_id: Unique token identifier (jti).
    """

    account_id: int
    username: str
    tenant_id: int | None
    roles: tuple[str, ...] = field(default_factory=tuple)
    permissions: tuple[str, ...] = field(default_factory=tuple)
    token_id: str | None = None

    def has_permission(self, permission: str) -> bool:
        """Check a permission; ``manage_all`` implies every permission."""
        return MANAGE_ALL in self.permissions or permission in self.permissions
