"""Report persistence models."""

from app.modules.reports.models.report import ReportRecord

__all__ = ["ReportRecord"]
