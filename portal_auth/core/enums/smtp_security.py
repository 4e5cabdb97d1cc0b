"""SMTP transport security modes.

Modes:
- STARTTLS: Plain connection upgraded with STARTTLS (usually port 587)
- SSL: Implicit TLS from the first byte (usually port 465)
- NONE: Unencrypted, for local mail catchers only
"""

from enum import Enum


class SmtpSecurity(str, Enum):
    """How the SMTP connection is secured."""

    STARTTLS = "starttls"
    SSL = "ssl"
    NONE = "none"
