"""Report update service: load, update, persist and announce a report change."""

import logging
from dataclasses import dataclass
from typing import Any

from app.core.logging import log_report_update_reverted, log_report_updated
from app.core.pubsub import EventPublisher
from app.core.pubsub.models import EventMetadata
from app.modules.reports import changes
from app.modules.reports.domain.report_entity import Report
from app.modules.reports.domain.report_id import ReportId
from app.modules.reports.repositories.report_repository import ReportsRepository

logger = logging.getLogger(__name__)

EVENT_SOURCE = "report_update_service"


@dataclass(frozen=True)
class ReportUpdateContext:
    """Who is updating the report, and the tenant flags that apply."""

    hostname: str
    subfolder: str | None
    user_id: int | str
    user_level: str
    is_datalake_v2_active: bool = False
    download_link_enabled: bool = False


class ReportUpdateService:
    """Apply a full replace or a patch to a stored report."""

    def __init__(self, repository: ReportsRepository, event_publisher: EventPublisher):
        """Initialize service.

        Args:
            repository: Report document store.
            event_publisher: Publisher for report events.
        """
        self.repository = repository
        self.event_publisher = event_publisher

    async def execute(
        self,
        report_id: ReportId,
        is_patch: bool,
        data: dict[str, Any],
        context: ReportUpdateContext,
    ) -> dict[str, Any]:
        """Update a report and return its new document.

        Validation errors propagate before anything is written. Any error
        raised after the in-memory update (persistence, event publication)
        restores the stored document to its previous version and is re-raised.

        Raises:
            ReportNotFoundException: If the report does not exist.
            ReportException: If the update is rejected.
        """
        report_before = self.repository.get_by_id(report_id)
        report = self.repository.get_by_id(report_id)

        report.update(
            context.hostname,
            context.subfolder,
            context.user_id,
            context.user_level,
            context.is_datalake_v2_active,
            context.download_link_enabled,
            is_patch,
            data,
        )

        try:
            self.repository.update(report)
            property_changes = await self._publish_update_event(
                report_id, report_before.info, report.info, context
            )
            await self._publish_schedule_event(report_id, report_before.info, report.info, context)
        except Exception as e:
            log_report_update_reverted(report_id.id, report_id.platform, str(e))
            self.repository.update(Report(report_id, report_before.info))
            raise

        log_report_updated(report_id.id, report_id.platform, context.user_id, data, property_changes)
        return report.info

    async def _publish_update_event(
        self,
        report_id: ReportId,
        before: dict[str, Any],
        after: dict[str, Any],
        context: ReportUpdateContext,
    ) -> dict[str, Any]:
        properties = changes.properties_changed(before, after)
        filters = changes.filters_changed(before, after)
        view_options = changes.view_options_changed(before, after)
        if not (properties or filters or view_options):
            return properties

        event_changes: dict[str, Any] = {}
        if properties:
            event_changes["properties"] = properties
        if filters:
            event_changes["filters"] = True
        if view_options:
            event_changes["view_options"] = True

        logger.debug(f"Report update changed for report {report_id.id}: {event_changes}")
        await self.event_publisher.publish(
            event_type="report.updated",
            entity_type="report",
            entity_id=report_id.id,
            platform=report_id.platform,
            user_id=str(context.user_id),
            metadata=EventMetadata(
                source=EVENT_SOURCE,
                version="1.0",
                additional_data={
                    "entity_name": after.get("title") or "",
                    "type": after.get("type") or "",
                    "description": after.get("description") or "",
                    "changes": event_changes,
                },
            ),
        )
        return properties

    async def _publish_schedule_event(
        self,
        report_id: ReportId,
        before: dict[str, Any],
        after: dict[str, Any],
        context: ReportUpdateContext,
    ) -> None:
        if not changes.is_planning_changed(before.get("planning"), after.get("planning")):
            logger.debug(f"Scheduling not changed for report {report_id.id}")
            return

        planning = after.get("planning")
        planning = planning if isinstance(planning, dict) else {}
        option = planning.get("option")
        option = option if isinstance(option, dict) else {}
        await self.event_publisher.publish(
            event_type="report.schedule_changed",
            entity_type="report",
            entity_id=report_id.id,
            platform=report_id.platform,
            user_id=str(context.user_id),
            metadata=EventMetadata(
                source=EVENT_SOURCE,
                version="1.0",
                additional_data={
                    "entity_name": after.get("title") or "",
                    "type": after.get("type") or "",
                    "description": after.get("description") or "",
                    "active": planning.get("active"),
                    "recipients": option.get("recipients"),
                    "startHour": option.get("startHour"),
                    "timezone": option.get("timezone"),
                    "every": option.get("every"),
                    "timeFrame": option.get("timeFrame"),
                    "scheduleFrom": option.get("scheduleFrom"),
                },
            ),
        )
