"""Error response builder for RFC 9457 Problem Details.

Exports:
    ApiProblem: HTTPException carrying a machine error code
    ErrorResponseBuilder: Builds Problem Details JSON responses from error codes
"""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from portal_auth.core.config import settings
from portal_auth.core.enums import ErrorCode
from portal_auth.presentation.api.middleware.trace_middleware import get_trace_id
from portal_auth.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.INVALID_OTP: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NO_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
}

_TITLE_BY_CODE: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Validation Failed",
    ErrorCode.RESOURCE_NOT_FOUND: "Resource Not Found",
    ErrorCode.INVALID_CREDENTIALS: "Invalid Credentials",
    ErrorCode.ACCOUNT_LOCKED: "Account Locked",
    ErrorCode.INVALID_OTP: "Invalid Verification Code",
    ErrorCode.NO_REFRESH_TOKEN: "Refresh Token Missing",
    ErrorCode.INVALID_REFRESH_TOKEN: "Invalid Refresh Token",
    ErrorCode.TOKEN_EXPIRED: "Token Expired",
    ErrorCode.TOKEN_INVALID: "Invalid Token",
    ErrorCode.PERMISSION_DENIED: "Access Denied",
}


class ApiProblem(HTTPException):
    """HTTPException rendered as Problem Details with a ``code`` member.

    Raised from dependencies, where no response object is available.
    """

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            status_code=ErrorResponseBuilder.status_for(code),
            detail=detail,
            headers=headers,
        )
        self.code = code


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> response = ErrorResponseBuilder.from_error_code(
        ...     ErrorCode.INVALID_CREDENTIALS,
        ...     request,
        ...     detail="Invalid username or password",
        ... )
    """

    @staticmethod
    def status_for(code: ErrorCode) -> int:
        """Map an error code to its HTTP status (500 when unmapped)."""
        return _STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def title_for(code: ErrorCode) -> str:
        """Human-readable title for an error code."""
        return _TITLE_BY_CODE.get(code, "Error")

    @staticmethod
    def from_error_code(
        code: ErrorCode,
        request: Request,
        *,
        detail: str,
        **extra: Any,
    ) -> JSONResponse:
        """Render an error code as a Problem Details JSON response.

        Args:
            code: Machine error code.
            request: Current request (for ``instance``).
            detail: Occurrence-specific explanation.
            **extra: Additional ProblemDetails members (e.g. ``locked_until``).

        Returns:
            JSONResponse with the mapped status code.
        """
        status_code = ErrorResponseBuilder.status_for(code)
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{code.value}",
            title=ErrorResponseBuilder.title_for(code),
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            code=code.value,
            trace_id=get_trace_id(),
            **extra,
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )
