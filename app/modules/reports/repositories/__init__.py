"""Report repositories for data access operations."""

from app.modules.reports.repositories.report_repository import ReportsRepository

__all__ = ["ReportsRepository"]
