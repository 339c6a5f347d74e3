"""Report identity value object."""

import re
from dataclasses import dataclass

from app.modules.reports.exceptions import InvalidReportIdException

_REPORT_ID_PATTERN = re.compile(r"^[a-z0-9]{8}(?:-[a-z0-9]{4}){3}-[a-z0-9]{12}$")


@dataclass(frozen=True)
class ReportId:
    """Primary key of a report: its UUID and the tenant platform."""

    id: str
    platform: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not _REPORT_ID_PATTERN.match(self.id):
            raise InvalidReportIdException.invalid_id()
        if not isinstance(self.platform, str) or self.platform == "":
            raise InvalidReportIdException.invalid_platform()

    def __str__(self) -> str:
        return f'[ReportId="{self.id}", Platform="{self.platform}"]'
