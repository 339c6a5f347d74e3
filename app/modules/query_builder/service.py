"""Custom report types service: edit definitions and serve preview executions."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from app.core.pubsub import EventPublisher
from app.core.pubsub.models import EventMetadata
from app.modules.query_builder.constants import (
    LAST_EDIT_BY_DATE_FORMAT,
    QUERY_BUILDER_ACTIVE,
    ErrorCode,
)
from app.modules.query_builder.engine import QueryEngine
from app.modules.query_builder.exceptions import (
    QueryBuilderException,
    QueryExecutionNotFoundException,
    RelatedReportsException,
)
from app.modules.query_builder.execution_registry import QueryExecutionRegistry
from app.modules.query_builder.manager import CustomReportTypesManager
from app.modules.query_builder.repository import CustomReportTypesRepository
from app.modules.query_builder.syntax import remove_extra_semicolon
from app.modules.reports.repositories.report_repository import ReportsRepository

logger = logging.getLogger(__name__)

EVENT_SOURCE = "custom_report_types_service"


class CustomReportTypesService:
    """Use cases of a stored custom report type."""

    def __init__(
        self,
        repository: CustomReportTypesRepository,
        reports_repository: ReportsRepository,
        engine: QueryEngine,
        event_publisher: EventPublisher,
        registry: QueryExecutionRegistry | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repository = repository
        self.reports_repository = reports_repository
        self.engine = engine
        self.event_publisher = event_publisher
        self.registry = registry
        self.clock = clock

    async def update(
        self,
        platform: str,
        custom_report_type_id: str,
        body: dict[str, Any],
        user_id: int | str,
    ) -> dict[str, Any]:
        """Apply a partial edit and return the stored definition.

        Activating a custom report type, or changing the sql or json of an
        active one, runs the resulting template through the query engine.
        Deactivating one that reports still use is refused.

        Raises:
            CustomReportTypeNotFoundException: If it does not exist.
            QueryBuilderException: If the edit is rejected.
            RelatedReportsException: On deactivation while reports use it.
        """
        detail = self.repository.get_by_id(platform, custom_report_type_id)
        if not body:
            return detail

        if body.get("name") == "":
            raise QueryBuilderException("Name field is mandatory", ErrorCode.MISSING_NAME_FIELD)

        changes = dict(body)
        if "sql" in changes:
            changes["sql"] = remove_extra_semicolon(changes["sql"])
        CustomReportTypesManager.update_custom_report_type(detail, changes)

        if changes.get("sql", "") == "" and detail.get("status") and not detail.get("sql"):
            raise QueryBuilderException("Provide a valid SQL", ErrorCode.WRONG_SQL)

        active = detail.get("status") == QUERY_BUILDER_ACTIVE
        template_changed = "sql" in changes or "json" in changes
        if active and ("status" in changes or template_changed):
            CustomReportTypesManager.is_sql_valid(self.engine, detail.get("sql"), detail.get("json"))

        if "status" in changes and not active:
            titles = self.reports_repository.titles_by_query_builder_id(platform, custom_report_type_id)
            if titles:
                raise RelatedReportsException(titles)

        detail["lastEditBy"] = user_id
        detail["lastEditByDate"] = self.clock().strftime(LAST_EDIT_BY_DATE_FORMAT)
        self.repository.save(platform, custom_report_type_id, detail)
        logger.info(f"Custom report type {custom_report_type_id} on {platform} updated by {user_id}")

        await self.event_publisher.publish(
            event_type="audit.custom_report_type_updated",
            entity_type="custom_report_type",
            entity_id=custom_report_type_id,
            platform=platform,
            user_id=str(user_id),
            metadata=EventMetadata(
                source=EVENT_SOURCE,
                additional_data={
                    "entity_name": detail.get("name"),
                    "description": detail.get("description"),
                    "status": "active" if detail.get("status") == QUERY_BUILDER_ACTIVE else "inactive",
                },
            ),
        )
        return detail

    async def launch_preview(
        self,
        platform: str,
        custom_report_type_id: str,
        sql: str | None,
        json_area: str | None,
    ) -> str:
        """Run a preview for a custom report type and return its execution id.

        The rows stay retrievable through ``get_preview_results`` while the
        registry key lives.
        """
        self.repository.get_by_id(platform, custom_report_type_id)
        rows = CustomReportTypesManager.preview(self.engine, sql, json_area)

        query_execution_id = str(uuid4())
        await self.registry.save(custom_report_type_id, query_execution_id, rows)
        return query_execution_id

    async def get_preview_results(
        self, platform: str, custom_report_type_id: str, query_execution_id: str
    ) -> list[dict[str, Any]]:
        """Rows of a preview launched for this custom report type.

        Raises:
            CustomReportTypeNotFoundException: If the custom report type does not exist.
            QueryExecutionNotFoundException: If the execution is unknown, expired
                or belongs to another custom report type.
        """
        self.repository.get_by_id(platform, custom_report_type_id)
        if not await self.registry.is_valid(custom_report_type_id, query_execution_id):
            raise QueryExecutionNotFoundException(query_execution_id)

        rows = await self.registry.load_rows(custom_report_type_id, query_execution_id)
        if rows is None:
            raise QueryExecutionNotFoundException(query_execution_id)
        return rows
