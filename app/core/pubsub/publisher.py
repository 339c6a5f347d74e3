"""Publish report events to Redis Streams."""

import logging

from pydantic import ValidationError

from app.core.config_file import get_settings
from app.core.pubsub.client import RedisStreamsClient
from app.core.pubsub.errors import PublishError, PubSubError
from app.core.pubsub.models import Event, EventMetadata

logger = logging.getLogger(__name__)

# Event type prefixes routed to the technical stream
TECHNICAL_PREFIXES = ("system.", "audit.")


class EventPublisher:
    """Builds events and appends them to the domain or technical stream."""

    def __init__(self, client: RedisStreamsClient):
        self.client = client
        self.settings = get_settings()

    def stream_for(self, event_type: str) -> str:
        if event_type.startswith(TECHNICAL_PREFIXES):
            return self.settings.REDIS_STREAM_TECHNICAL
        return self.settings.REDIS_STREAM_DOMAIN

    async def publish(
        self,
        event_type: str,
        entity_type: str,
        entity_id: str,
        platform: str,
        user_id: str | None = None,
        metadata: EventMetadata | None = None,
    ) -> str:
        """Append one event to its stream.

        Args:
            event_type: '<module>.<action>', e.g. 'report.updated'.
            entity_type: Kind of entity the event is about (e.g., 'report').
            entity_id: Id of that entity.
            platform: Tenant platform the entity belongs to.
            user_id: User who caused the event, if any.
            metadata: Source and payload of the event.

        Returns:
            The stream entry id assigned by Redis.

        Raises:
            PublishError: If the event is malformed or Redis refuses it.
        """
        try:
            event = Event(
                event_type=event_type,
                entity_type=entity_type,
                entity_id=entity_id,
                platform=platform,
                user_id=user_id,
                metadata=metadata or EventMetadata(source="unknown"),
            )
        except ValidationError as e:
            logger.error(f"Rejected event '{event_type}' for {entity_type} {entity_id}: {e}")
            raise PublishError(f"Invalid event data: {e}") from e

        stream = self.stream_for(event_type)
        try:
            async with self.client.connection() as redis_client:
                entry_id = await redis_client.xadd(stream, event.to_redis_dict())
        except PubSubError as e:
            logger.error(f"Failed to publish '{event_type}' for {entity_type} {entity_id}: {e}")
            raise PublishError(f"Failed to publish event: {e}") from e

        logger.info(
            f"Published '{event_type}' for {entity_type} {entity_id} on {platform} "
            f"to '{stream}' (entry {entry_id})"
        )
        return entry_id
