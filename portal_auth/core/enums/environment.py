"""Application environment types.

Environments:
- DEVELOPMENT: Local development, console logs, cookies without Secure
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Production deployment with full security
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
