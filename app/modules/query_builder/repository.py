"""Custom report types repository."""

import copy
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.modules.query_builder.exceptions import CustomReportTypeNotFoundException
from app.modules.query_builder.models import CustomReportTypeRecord

logger = logging.getLogger(__name__)


class CustomReportTypesRepository:
    """Repository for custom report type documents, keyed by (id, platform)."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, platform: str, custom_report_type_id: str) -> dict[str, Any]:
        """Load a custom report type document.

        Raises:
            CustomReportTypeNotFoundException: If it is missing or soft-deleted.
        """
        record = self.db.get(CustomReportTypeRecord, (custom_report_type_id, platform))
        if record is None or not isinstance(record.info, dict) or record.info.get("deleted") is True:
            raise CustomReportTypeNotFoundException(custom_report_type_id)
        return copy.deepcopy(record.info)

    def save(self, platform: str, custom_report_type_id: str, detail: dict[str, Any]) -> None:
        """Insert or replace a custom report type document."""
        info = copy.deepcopy(detail)
        record = self.db.get(CustomReportTypeRecord, (custom_report_type_id, platform))
        if record is None:
            record = CustomReportTypeRecord(
                id_custom_report_type=custom_report_type_id, platform=platform, info=info
            )
            self.db.add(record)
        else:
            record.info = info
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.debug(f"Stored custom report type {custom_report_type_id} on {platform}")
