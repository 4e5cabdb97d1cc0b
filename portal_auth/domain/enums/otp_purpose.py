"""Purposes a one-time code can be issued for."""

from enum import Enum


class OtpPurpose(str, Enum):
    """One-time code purpose.

    Codes are keyed by (email, purpose); a code issued for one purpose can
    never be consumed by another.
    """

    LOGIN = "login"
