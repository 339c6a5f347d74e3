"""Custom report type document model."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB

from app.core.db.session import Base


class CustomReportTypeRecord(Base):
    """Stored query builder definition (name, status, sql template and filter map)."""

    __tablename__ = "custom_report_types"

    id_custom_report_type = Column(String(36), primary_key=True)
    platform = Column(String(255), primary_key=True)
    info = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<CustomReportTypeRecord(id={self.id_custom_report_type}, platform={self.platform})>"
        )
