"""Query builder router: template checks, custom report type edits and previews."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, status

from app.core.config_file import get_settings
from app.core.db.deps import DbSession
from app.core.exceptions import raise_bad_request, raise_internal_server_error, raise_not_found
from app.core.pubsub import EventPublisher, PublishError, get_event_publisher
from app.modules.query_builder.engine import QueryEngine, SqlAlchemyQueryEngine
from app.modules.query_builder.exceptions import (
    CustomReportTypeNotFoundException,
    QueryBuilderException,
    QueryExecutionNotFoundException,
    RelatedReportsException,
)
from app.modules.query_builder.execution_registry import (
    QueryExecutionRegistry,
    get_query_execution_registry,
)
from app.modules.query_builder.filters import get_runnable_query
from app.modules.query_builder.manager import CustomReportTypesManager
from app.modules.query_builder.repository import CustomReportTypesRepository
from app.modules.query_builder.schemas import (
    CustomReportTypeUpdateRequest,
    QueryExecutionResponse,
    QueryPreviewResponse,
    QueryTemplateRequest,
    QueryValidationResponse,
    RunnableQueryResponse,
)
from app.modules.query_builder.service import CustomReportTypesService
from app.modules.query_builder.syntax import remove_extra_semicolon
from app.modules.reports.repositories.report_repository import ReportsRepository
from app.schemas.common import ERROR_RESPONSES, StandardResponse

router = APIRouter(responses=ERROR_RESPONSES)


def get_query_engine(db: DbSession) -> QueryEngine:
    """Dependency to get the query engine."""
    return SqlAlchemyQueryEngine(db)


def get_custom_report_types_service(
    db: DbSession,
    engine: Annotated[QueryEngine, Depends(get_query_engine)],
    event_publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
    registry: Annotated[QueryExecutionRegistry, Depends(get_query_execution_registry)],
) -> CustomReportTypesService:
    """Dependency to get CustomReportTypesService."""
    return CustomReportTypesService(
        CustomReportTypesRepository(db), ReportsRepository(db), engine, event_publisher, registry
    )


def _raise_query_builder_error(exc: QueryBuilderException) -> None:
    details: dict[str, Any] = {"error_code": int(exc.code), "area": exc.area}
    if isinstance(exc, RelatedReportsException):
        details["related_reports"] = exc.report_titles
    name = exc.code.name
    code = name if name.startswith("QUERY_BUILDER_") else f"QUERY_BUILDER_{name}"
    raise_bad_request(code=code, message=exc.message, details=details)


@router.post(
    "/runnable-query",
    response_model=StandardResponse[RunnableQueryResponse],
    status_code=status.HTTP_200_OK,
    summary="Build runnable query",
    description="Validate a SQL template against its filter map and return the substituted SQL.",
)
async def build_runnable_query(
    payload: QueryTemplateRequest,
) -> StandardResponse[RunnableQueryResponse]:
    """Return the substituted SQL without executing it."""
    settings = get_settings()
    try:
        sql = get_runnable_query(
            settings.DATALAKE_V3_ACTIVE, remove_extra_semicolon(payload.sql), payload.json_area
        )
    except QueryBuilderException as e:
        _raise_query_builder_error(e)

    return StandardResponse(data=RunnableQueryResponse(sql=sql))


@router.post(
    "/validate",
    response_model=StandardResponse[QueryValidationResponse],
    status_code=status.HTTP_200_OK,
    summary="Validate query",
    description="Run the runnable query through the query engine.",
)
async def validate_query(
    payload: QueryTemplateRequest,
    engine: Annotated[QueryEngine, Depends(get_query_engine)],
) -> StandardResponse[QueryValidationResponse]:
    """Check that the query engine accepts the template."""
    try:
        valid = CustomReportTypesManager.is_sql_valid(engine, payload.sql, payload.json_area)
    except QueryBuilderException as e:
        _raise_query_builder_error(e)

    return StandardResponse(data=QueryValidationResponse(valid=valid))


@router.post(
    "/preview",
    response_model=StandardResponse[QueryPreviewResponse],
    status_code=status.HTTP_200_OK,
    summary="Preview query",
    description="Run the limited runnable query and return its rows.",
)
async def preview_query(
    payload: QueryTemplateRequest,
    engine: Annotated[QueryEngine, Depends(get_query_engine)],
) -> StandardResponse[QueryPreviewResponse]:
    """Return the first rows of the runnable query."""
    try:
        rows = CustomReportTypesManager.preview(engine, payload.sql, payload.json_area)
    except QueryBuilderException as e:
        _raise_query_builder_error(e)

    return StandardResponse(data=QueryPreviewResponse(rows=rows, count=len(rows)))


@router.put(
    "/{platform}/{custom_report_type_id}",
    response_model=StandardResponse[dict[str, Any]],
    status_code=status.HTTP_200_OK,
    summary="Edit custom report type",
    description="Partially update a custom report type. Activation checks its SQL template.",
)
async def update_custom_report_type(
    platform: str,
    custom_report_type_id: str,
    payload: CustomReportTypeUpdateRequest,
    x_user_id: Annotated[str, Header(alias="X-User-Id")],
    service: Annotated[CustomReportTypesService, Depends(get_custom_report_types_service)],
) -> StandardResponse[dict[str, Any]]:
    """Edit name, description, status, sql or json of a custom report type."""
    body = payload.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)
    user_id = int(x_user_id) if x_user_id.isdigit() else x_user_id
    try:
        detail = await service.update(platform, custom_report_type_id, body, user_id)
    except CustomReportTypeNotFoundException as e:
        raise_not_found("Custom report type", e.custom_report_type_id)
    except QueryBuilderException as e:
        _raise_query_builder_error(e)
    except PublishError as e:
        raise_internal_server_error(
            code="CUSTOM_REPORT_TYPE_EVENT_PUBLISH_FAILED",
            message="Custom report type saved but its audit event was not published",
            details={"reason": str(e)},
        )

    return StandardResponse(data=detail)


@router.post(
    "/{platform}/{custom_report_type_id}/preview",
    response_model=StandardResponse[QueryExecutionResponse],
    status_code=status.HTTP_200_OK,
    summary="Launch custom report type preview",
    description="Run the limited runnable query and keep its rows for the results endpoint.",
)
async def launch_custom_report_type_preview(
    platform: str,
    custom_report_type_id: str,
    payload: QueryTemplateRequest,
    service: Annotated[CustomReportTypesService, Depends(get_custom_report_types_service)],
) -> StandardResponse[QueryExecutionResponse]:
    """Return the execution id to fetch the preview rows with."""
    try:
        query_execution_id = await service.launch_preview(
            platform, custom_report_type_id, payload.sql, payload.json_area
        )
    except CustomReportTypeNotFoundException as e:
        raise_not_found("Custom report type", e.custom_report_type_id)
    except QueryBuilderException as e:
        _raise_query_builder_error(e)

    return StandardResponse(data=QueryExecutionResponse(query_execution_id=query_execution_id))


@router.get(
    "/{platform}/{custom_report_type_id}/results/{query_execution_id}",
    response_model=StandardResponse[QueryPreviewResponse],
    status_code=status.HTTP_200_OK,
    summary="Get custom report type preview results",
    description="Rows of a preview launched for this custom report type, while it has not expired.",
)
async def get_custom_report_type_results(
    platform: str,
    custom_report_type_id: str,
    query_execution_id: str,
    service: Annotated[CustomReportTypesService, Depends(get_custom_report_types_service)],
) -> StandardResponse[QueryPreviewResponse]:
    """Return the stored rows of a preview execution."""
    try:
        rows = await service.get_preview_results(platform, custom_report_type_id, query_execution_id)
    except CustomReportTypeNotFoundException as e:
        raise_not_found("Custom report type", e.custom_report_type_id)
    except QueryExecutionNotFoundException as e:
        raise_not_found("Query execution", e.query_execution_id)

    return StandardResponse(data=QueryPreviewResponse(rows=rows, count=len(rows)))
