"""Response envelope shared by every endpoint."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class StandardResponse[T](BaseModel):
    """Successful response: the payload under ``data``, ``error`` always null."""

    data: T = Field(..., description="Response data")
    meta: dict[str, Any] | None = Field(None, description="Optional metadata")
    error: None = Field(None, description="Always null on success")


class ErrorDetail(BaseModel):
    """What went wrong, with the numeric domain code in ``details``."""

    code: str = Field(..., description="Symbolic error code, e.g. 'QUERY_BUILDER_WRONG_SQL'")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="e.g. {'error_code': 24, 'area': 'sql'}")


class ErrorResponse(BaseModel):
    """Error response: ``error`` filled, ``data`` null."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "REPORT_FIELD_NOT_EDITABLE",
                    "message": 'Field "author" not editable',
                    "details": {"error_code": 1005},
                },
                "data": None,
            }
        }
    )

    error: ErrorDetail
    data: None = None


# OpenAPI documentation of the error envelope for router decorators
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Rejected input"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    422: {"model": ErrorResponse, "description": "Malformed request"},
}
