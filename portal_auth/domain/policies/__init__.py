"""Pure domain policies (no I/O)."""

from portal_auth.domain.policies.email_masking import mask_email
from portal_auth.domain.policies.lockout_policy import LOCKOUT_TIERS, next_lockout

__all__ = ["LOCKOUT_TIERS", "mask_email", "next_lockout"]
