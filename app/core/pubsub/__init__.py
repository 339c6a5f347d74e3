"""Report events published to Redis Streams.

``report.updated`` and ``report.schedule_changed`` go to the domain stream,
``system.*`` and ``audit.*`` events to the technical stream.
"""

from app.core.pubsub.client import RedisStreamsClient
from app.core.pubsub.errors import PublishError, PubSubError
from app.core.pubsub.models import Event, EventMetadata
from app.core.pubsub.publisher import EventPublisher

__all__ = [
    "Event",
    "EventMetadata",
    "EventPublisher",
    "PubSubError",
    "PublishError",
    "RedisStreamsClient",
    "get_event_publisher",
]


def get_event_publisher() -> EventPublisher:
    """Dependency returning a publisher bound to the configured Redis."""
    return EventPublisher(client=RedisStreamsClient.from_settings())
