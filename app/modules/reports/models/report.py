"""Report document model."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB

from app.core.db.session import Base


class ReportRecord(Base):
    """Stored report configuration document, keyed by report id and platform."""

    __tablename__ = "reports"

    id_report = Column(String(36), primary_key=True)
    platform = Column(String(255), primary_key=True)
    info = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)  # Report document
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ReportRecord(id_report={self.id_report}, platform={self.platform})>"
