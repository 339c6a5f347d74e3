"""Reports repository: document store keyed by (report id, platform)."""

import copy
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.modules.reports.domain.report_entity import Report
from app.modules.reports.domain.report_id import ReportId
from app.modules.reports.exceptions import ReportNotFoundException
from app.modules.reports.models.report import ReportRecord

logger = logging.getLogger(__name__)


class ReportsRepository:
    """Repository for report documents."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def _get_record(self, report_id: ReportId) -> ReportRecord | None:
        return self.db.get(ReportRecord, (report_id.id, report_id.platform))

    def get_by_id(self, report_id: ReportId) -> Report:
        """Load a report.

        Raises:
            ReportNotFoundException: If the report is missing or soft-deleted.
        """
        record = self._get_record(report_id)
        if record is None or not isinstance(record.info, dict) or record.info.get("deleted") is True:
            raise ReportNotFoundException(report_id.id)
        # Each load hands out an independent document
        return Report(report_id, copy.deepcopy(record.info))

    def update(self, report: Report) -> None:
        """Insert or replace the stored document of a report."""
        info = copy.deepcopy(report.info)
        record = self._get_record(report.id)
        if record is None:
            record = ReportRecord(id_report=report.id.id, platform=report.id.platform, info=info)
            self.db.add(record)
        else:
            record.info = info
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.debug(f"Stored report {report.id}")

    def add(self, report: Report) -> None:
        self.update(report)

    def titles_by_query_builder_id(self, platform: str, query_builder_id: str) -> list[str]:
        """Titles of the live reports of a platform built on a custom report type."""
        records = self.db.scalars(select(ReportRecord).where(ReportRecord.platform == platform))
        return [
            record.info.get("title", "")
            for record in records
            if isinstance(record.info, dict)
            and record.info.get("queryBuilderId") == query_builder_id
            and record.info.get("deleted") is not True
        ]
