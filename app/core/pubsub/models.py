"""Pydantic models for report events."""

import json
import re
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

EVENT_TYPE_PATTERN = re.compile(r"^[a-z_]+\.[a-z_]+$")


class EventMetadata(BaseModel):
    """Where an event comes from and what it carries."""

    source: str = Field(..., description="Emitting component (e.g., 'report_update_service')")
    version: str = Field(default="1.0", description="Payload schema version")
    additional_data: dict[str, Any] = Field(
        default_factory=dict, description="Event payload, e.g. the detected report changes"
    )


class Event(BaseModel):
    """One entry of a Redis stream."""

    event_id: UUID = Field(default_factory=uuid4)
    event_type: str = Field(..., description="'<module>.<action>', e.g. 'report.updated'")
    entity_type: str = Field(..., description="Kind of entity (e.g., 'report')")
    entity_id: str = Field(..., description="Entity id, the report UUID for report events")
    platform: str = Field(..., min_length=1, description="Tenant platform")
    user_id: str | None = Field(default=None)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: EventMetadata

    @field_validator("event_type")
    @classmethod
    def validate_event_type(cls, v: str) -> str:
        if not EVENT_TYPE_PATTERN.match(v):
            raise ValueError(f"event_type must look like '<module>.<action>' in snake case, got: {v}")
        return v

    def to_redis_dict(self) -> dict[str, str]:
        """Flatten to the string-only field map Redis Streams stores."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "platform": self.platform,
            "user_id": self.user_id or "",
            "timestamp": self.timestamp.isoformat(),
            "metadata_source": self.metadata.source,
            "metadata_version": self.metadata.version,
            "metadata_additional_data": json.dumps(self.metadata.additional_data, default=str),
        }

    @classmethod
    def from_redis_dict(cls, data: dict[str, str]) -> "Event":
        """Rebuild an event read back from a stream entry."""
        raw_payload = data.get("metadata_additional_data")
        return cls(
            event_id=UUID(data["event_id"]),
            event_type=data["event_type"],
            entity_type=data["entity_type"],
            entity_id=data["entity_id"],
            platform=data["platform"],
            user_id=data.get("user_id") or None,
            timestamp=datetime.fromisoformat(data["timestamp"]),
            metadata=EventMetadata(
                source=data.get("metadata_source", "unknown"),
                version=data.get("metadata_version", "1.0"),
                additional_data=json.loads(raw_payload) if raw_payload else {},
            ),
        )
