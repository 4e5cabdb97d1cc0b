"""Global exception handlers for the FastAPI application.

Handlers:
    http_exception_handler: Converts HTTPException (and ApiProblem) to RFC 9457
    validation_exception_handler: Converts RequestValidationError to RFC 9457
    generic_exception_handler: Catches all unhandled exceptions

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portal_auth.core.config import settings
from portal_auth.core.container import get_logger
from portal_auth.core.enums import ErrorCode
from portal_auth.presentation.api.middleware.trace_middleware import get_trace_id
from portal_auth.presentation.routers.api.v1.errors.error_response_builder import (
    ApiProblem,
    ErrorResponseBuilder,
)
from portal_auth.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# HTTP status code to (title, slug) mapping
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    415: ("Unsupported Media Type", "unsupported-media-type"),
    422: ("Validation Failed", "validation-failed"),
    423: ("Account Locked", "locked"),
    500: ("Internal Server Error", "internal-server-error"),
    503: ("Service Unavailable", "service-unavailable"),
}


def _get_status_title(status_code: int) -> str:
    """Get human-readable title for HTTP status code."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[0]


def _get_error_slug(status_code: int) -> str:
    """Get kebab-case error slug for the problem type URL."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[1]


def _trace_id(request: Request) -> str | None:
    return get_trace_id() or getattr(request.state, "trace_id", None)


async def http_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert HTTPException to a Problem Details response.

    ApiProblem instances carry an ErrorCode, which selects ``type``,
    ``title`` and ``code``; plain HTTPExceptions are described by status.

    Args:
        request: FastAPI Request object.
        exc: HTTPException raised by handler or dependency.

    Returns:
        JSONResponse with ProblemDetails.
    """
    assert isinstance(exc, HTTPException)

    code: ErrorCode | None = exc.code if isinstance(exc, ApiProblem) else None
    if code is not None:
        problem_type = f"{settings.api_base_url}/errors/{code.value}"
        title = ErrorResponseBuilder.title_for(code)
    else:
        problem_type = f"{settings.api_base_url}/errors/{_get_error_slug(exc.status_code)}"
        title = _get_status_title(exc.status_code)

    problem = ProblemDetails(
        type=problem_type,
        title=title,
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path),
        code=code.value if code is not None else None,
        trace_id=_trace_id(request),
    )

    # Preserve any headers from HTTPException (e.g., WWW-Authenticate)
    headers = getattr(exc, "headers", None)

    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to a Problem Details response.

    Field paths drop the ``body``/``query`` prefix, so a missing login
    identifier is reported as ``usernameOrEmail``.
    """
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p not in ("body", "query", "path")]
        field_name = ".".join(field_parts) if field_parts else "unknown"

        field_errors.append(
            ErrorDetail(
                field=field_name,
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{ErrorCode.VALIDATION_FAILED.value}",
        title="Validation Failed",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed. Check 'errors' for details.",
        instance=str(request.url.path),
        code=ErrorCode.VALIDATION_FAILED.value,
        errors=field_errors if field_errors else None,
        trace_id=_trace_id(request),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    The exception is logged with the trace id; the client only receives a
    generic 500 Problem Details body.
    """
    trace_id = _trace_id(request)

    get_logger().error(
        "Unhandled exception",
        error=exc,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        trace_id=trace_id,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
