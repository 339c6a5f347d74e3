"""Reports router: full replace and partial update of report configurations."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, status

from app.core.config_file import get_settings
from app.core.db.deps import DbSession
from app.core.exceptions import raise_bad_request, raise_internal_server_error, raise_not_found
from app.core.pubsub import EventPublisher, PublishError, get_event_publisher
from app.modules.reports.constants import UserLevels
from app.modules.reports.domain.report_id import ReportId
from app.modules.reports.exceptions import (
    FieldNotEditableException,
    InvalidFieldException,
    InvalidReportIdException,
    MandatoryFieldNotFoundException,
    ReportException,
    ReportNotFoundException,
)
from app.modules.reports.repositories.report_repository import ReportsRepository
from app.modules.reports.services.report_update_service import (
    ReportUpdateContext,
    ReportUpdateService,
)
from app.schemas.common import ERROR_RESPONSES, StandardResponse

router = APIRouter(responses=ERROR_RESPONSES)

ERROR_CODES: dict[type[ReportException], str] = {
    InvalidReportIdException: "REPORT_INVALID_ID",
    MandatoryFieldNotFoundException: "REPORT_MANDATORY_FIELD_NOT_FOUND",
    InvalidFieldException: "REPORT_INVALID_FIELD",
    FieldNotEditableException: "REPORT_FIELD_NOT_EDITABLE",
}


def get_report_update_service(
    db: DbSession,
    event_publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> ReportUpdateService:
    """Dependency to get ReportUpdateService."""
    return ReportUpdateService(ReportsRepository(db), event_publisher)


def get_update_context(
    x_user_id: Annotated[str, Header(alias="X-User-Id")],
    x_user_level: Annotated[str, Header(alias="X-User-Level")] = UserLevels.GOD_ADMIN.value,
    x_hostname: Annotated[str, Header(alias="X-Hostname")] = "",
    x_subfolder: Annotated[str | None, Header(alias="X-Subfolder")] = None,
) -> ReportUpdateContext:
    """Build the caller context from request headers and tenant settings."""
    settings = get_settings()
    return ReportUpdateContext(
        hostname=x_hostname,
        subfolder=x_subfolder,
        user_id=int(x_user_id) if x_user_id.isdigit() else x_user_id,
        user_level=x_user_level,
        is_datalake_v2_active=settings.DATALAKE_V2_ACTIVE,
        download_link_enabled=settings.REPORT_DOWNLOAD_PERMISSION_LINK,
    )


async def _update_report(
    service: ReportUpdateService,
    platform: str,
    report_id: str,
    is_patch: bool,
    data: dict[str, Any],
    context: ReportUpdateContext,
) -> dict[str, Any]:
    try:
        return await service.execute(ReportId(report_id, platform), is_patch, data, context)
    except ReportNotFoundException as e:
        raise_not_found("Report", e.report_id, details={"error_code": e.code})
    except ReportException as e:
        raise_bad_request(
            code=ERROR_CODES.get(type(e), "REPORT_ERROR"),
            message=e.message,
            details={"error_code": e.code},
        )
    except PublishError as e:
        raise_internal_server_error(
            code="REPORT_EVENT_PUBLISH_FAILED",
            message="Report update reverted: event publication failed",
            details={"reason": str(e)},
        )


@router.put(
    "/{platform}/{report_id}",
    response_model=StandardResponse[dict[str, Any]],
    status_code=status.HTTP_200_OK,
    summary="Replace report",
    description="Replace a report configuration. Immutable fields in the payload are ignored.",
)
async def replace_report(
    platform: str,
    report_id: str,
    data: Annotated[dict[str, Any], Body(...)],
    context: Annotated[ReportUpdateContext, Depends(get_update_context)],
    service: Annotated[ReportUpdateService, Depends(get_report_update_service)],
) -> StandardResponse[dict[str, Any]]:
    """Full replace of a report configuration."""
    info = await _update_report(service, platform, report_id, False, data, context)
    return StandardResponse(data=info)


@router.patch(
    "/{platform}/{report_id}",
    response_model=StandardResponse[dict[str, Any]],
    status_code=status.HTTP_200_OK,
    summary="Patch report",
    description="Partially update a report configuration. Unknown fields are ignored.",
)
async def patch_report(
    platform: str,
    report_id: str,
    data: Annotated[dict[str, Any], Body(...)],
    context: Annotated[ReportUpdateContext, Depends(get_update_context)],
    service: Annotated[ReportUpdateService, Depends(get_report_update_service)],
) -> StandardResponse[dict[str, Any]]:
    """Partial update of a report configuration."""
    info = await _update_report(service, platform, report_id, True, data, context)
    return StandardResponse(data=info)
