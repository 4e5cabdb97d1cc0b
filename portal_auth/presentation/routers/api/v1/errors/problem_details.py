"""RFC 9457 Problem Details for HTTP APIs.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: Problem Details response schema with a machine ``code``
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Attributes:
        field: Name of the field with error
        code: Machine-readable error code
        message: Human-readable error message
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        code: Machine-readable error code clients branch on
            (``invalid_credentials``, ``account_locked``, ...)
        errors: Optional list of field-specific errors (for validation failures)
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/account_locked",
        ...     title="Account Locked",
        ...     status=423,
        ...     detail="Account is temporarily locked",
        ...     instance="/api/v1/auth/login",
        ...     code="account_locked",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/invalid_credentials"],
    )
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code", examples=[401])
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/auth/login"],
    )
    code: str | None = Field(None, description="Machine-readable error code")
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    locked_until: str | None = Field(
        None, description="Lockout expiry (ISO 8601), only for account_locked"
    )
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
