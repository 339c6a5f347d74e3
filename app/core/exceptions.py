"""HTTP error envelope shared by every router."""

from typing import Any

from fastapi import HTTPException, status


class APIException(HTTPException):
    """HTTP error rendered as ``{"error": {"code", "message", "details"}, "data": null}``.

    Routers translate domain exceptions into this one; the numeric domain
    code travels in ``details["error_code"]``.

    Example:
        raise APIException(
            code="QUERY_BUILDER_WRONG_SQL",
            message="Syntax not valid",
            details={"error_code": 24, "area": "sql"},
        )
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            code: Symbolic error code (e.g., 'REPORT_FIELD_NOT_EDITABLE').
            message: Human-readable error message.
            status_code: HTTP status code (default: 400).
            details: Extra data for the client, such as the numeric domain code.
        """
        self.code = code
        self.message = message
        self.details = details
        super().__init__(status_code=status_code, detail={"error": self.as_error()})

    def as_error(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


def raise_not_found(
    resource: str, resource_id: str | None = None, details: dict[str, Any] | None = None
) -> None:
    """Raise a 404 with code ``<RESOURCE>_NOT_FOUND``.

    Raises:
        APIException: Always.
    """
    message = f"{resource} not found" if not resource_id else f"{resource} not found (ID: {resource_id})"
    code = resource.upper().replace(" ", "_") + "_NOT_FOUND"
    raise APIException(code, message, status.HTTP_404_NOT_FOUND, details)


def raise_bad_request(code: str, message: str, details: dict[str, Any] | None = None) -> None:
    """Raise a 400 for a rejected query template or report update.

    Raises:
        APIException: Always.
    """
    raise APIException(code, message, status.HTTP_400_BAD_REQUEST, details)


def raise_internal_server_error(
    code: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Raise a 500, used when a side effect failed after validation passed.

    Raises:
        APIException: Always.
    """
    raise APIException(code, message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)
