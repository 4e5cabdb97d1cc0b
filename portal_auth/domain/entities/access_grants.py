"""Roles and permissions held by an account."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessGrants:
    """Result of a permission/role lookup.

    Attributes:
        roles: Role names, sorted.
        permissions: Permission names, sorted and de-duplicated.
    """

    roles: tuple[str, ...] = field(default_factory=tuple)
    permissions: tuple[str, ...] = field(default_factory=tuple)
