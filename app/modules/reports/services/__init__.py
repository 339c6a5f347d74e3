"""Report services."""

from app.modules.reports.services.report_update_service import (
    ReportUpdateContext,
    ReportUpdateService,
)

__all__ = ["ReportUpdateContext", "ReportUpdateService"]
