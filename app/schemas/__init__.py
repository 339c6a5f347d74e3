"""Pydantic schemas shared by API responses."""

from app.schemas.common import ERROR_RESPONSES, ErrorDetail, ErrorResponse, StandardResponse

__all__ = ["ERROR_RESPONSES", "ErrorDetail", "ErrorResponse", "StandardResponse"]
