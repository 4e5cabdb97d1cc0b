"""Problem Details rendering for API v1.

Usage:
    from portal_auth.presentation.routers.api.v1.errors import ErrorResponseBuilder
"""

from portal_auth.presentation.routers.api.v1.errors.error_response_builder import (
    ApiProblem,
    ErrorResponseBuilder,
)
from portal_auth.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from portal_auth.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ApiProblem",
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
