"""Custom report types manager: validation, preview and partial updates."""

import logging
from typing import Any

from app.core.config_file import get_settings
from app.modules.query_builder.constants import ErrorCode
from app.modules.query_builder.engine import QueryEngine
from app.modules.query_builder.exceptions import QueryBuilderException, QueryError
from app.modules.query_builder.filters import get_runnable_query
from app.modules.query_builder.syntax import build_limited_query, remove_extra_semicolon

logger = logging.getLogger(__name__)


class CustomReportTypesManager:
    """Operations on query builder backed custom report types."""

    @staticmethod
    def _run(engine: QueryEngine, sql: str, limit: int) -> list[dict[str, Any]]:
        try:
            return engine.execute(build_limited_query(sql, limit))
        except QueryError as e:
            raise QueryBuilderException(str(e), ErrorCode.WRONG_SQL) from e

    @staticmethod
    def is_sql_valid(
        engine: QueryEngine,
        sql: str | None,
        json_area: str | None = None,
        datalake_v3: bool | None = None,
    ) -> bool:
        """Check a template against the query engine.

        Args:
            engine: Query engine that runs the check.
            sql: SQL template.
            json_area: Filter map as a JSON string.
            datalake_v3: Dialect flag (defaults to settings).

        Returns:
            True when the engine accepts the runnable query.

        Raises:
            QueryBuilderException: When the template is rejected or the engine
                refuses the statement (WRONG_SQL with the engine message).
        """
        settings = get_settings()
        if datalake_v3 is None:
            datalake_v3 = settings.DATALAKE_V3_ACTIVE

        runnable = get_runnable_query(datalake_v3, remove_extra_semicolon(sql), json_area)
        CustomReportTypesManager._run(engine, runnable, settings.QUERY_BUILDER_PREVIEW_LIMIT)
        return True

    @staticmethod
    def preview(
        engine: QueryEngine,
        sql: str | None,
        json_area: str | None = None,
        datalake_v3: bool | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run the limited runnable query and return its rows."""
        settings = get_settings()
        if datalake_v3 is None:
            datalake_v3 = settings.DATALAKE_V3_ACTIVE
        if limit is None:
            limit = settings.QUERY_BUILDER_RESULTS_LIMIT

        runnable = get_runnable_query(datalake_v3, remove_extra_semicolon(sql), json_area)
        rows = CustomReportTypesManager._run(engine, runnable, limit)
        logger.info(f"Query builder preview returned {len(rows)} row(s)")
        return rows

    @staticmethod
    def update_custom_report_type(detail: dict[str, Any], body: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update to a custom report type document.

        Only ``name``, ``description``, ``sql``, ``json`` and ``status`` are
        copied; ``status`` is coerced to ``int``.
        """
        for field in ("name", "description"):
            if field in body:
                detail[field] = body[field]

        if "status" in body:
            detail["status"] = int(body["status"])

        for field in ("sql", "json"):
            if field in body:
                detail[field] = body[field]

        return detail
