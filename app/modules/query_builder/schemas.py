"""Pydantic schemas for query builder endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class QueryTemplateRequest(BaseModel):
    """SQL template with its filter map."""

    sql: str = Field(..., description="SQL template with {name} placeholders")
    json_area: str | None = Field(
        default=None,
        alias="json",
        description="JSON document mapping placeholder names to filter descriptors",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "sql": "select {f1} from core_user",
                "json": '{"f1": {"field": "core_user.userid", "type": "users"}}',
            }
        },
    }


class RunnableQueryResponse(BaseModel):
    """Substituted SQL statement."""

    sql: str


class QueryValidationResponse(BaseModel):
    """Outcome of probing a template against the query engine."""

    valid: bool


class QueryPreviewResponse(BaseModel):
    """Rows returned by a preview run."""

    rows: list[dict[str, Any]]
    count: int


class CustomReportTypeUpdateRequest(BaseModel):
    """Partial edit of a custom report type; omitted fields are left untouched."""

    name: str | None = None
    description: str | None = None
    status: int | None = Field(default=None, description="1 active, 0 inactive")
    sql: str | None = None
    json_area: str | None = Field(default=None, alias="json")

    model_config = {"populate_by_name": True}


class QueryExecutionResponse(BaseModel):
    """Handle of a preview execution, used to fetch its rows."""

    query_execution_id: str
