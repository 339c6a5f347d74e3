"""Redis Streams connection used by the report event publisher."""

import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from app.core.config_file import Settings, get_settings
from app.core.pubsub.errors import PubSubError

logger = logging.getLogger(__name__)


class RedisStreamsClient:
    """Lazily connected async Redis client for the event streams.

    The connection is opened on first use and dropped after any Redis error,
    so the next publication reconnects.
    """

    def __init__(self, redis_url: str, password: str = "", connect_timeout: int = 5):
        self.redis_url = redis_url
        self.password = password
        self.connect_timeout = connect_timeout
        self._client: aioredis.Redis | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RedisStreamsClient":
        settings = settings or get_settings()
        return cls(redis_url=settings.REDIS_URL, password=settings.REDIS_PASSWORD)

    async def _get_client(self) -> aioredis.Redis:
        if self._client is not None:
            return self._client

        # A password embedded in the URL wins over the separate setting
        extra = {"password": self.password} if self.password and "@" not in self.redis_url else {}
        client = aioredis.from_url(
            self.redis_url,
            decode_responses=True,
            socket_connect_timeout=self.connect_timeout,
            socket_keepalive=True,
            **extra,
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.error(f"Event stream Redis unreachable at {self.redis_url}: {e}")
            await client.aclose()
            raise PubSubError(f"Failed to connect to Redis: {e}") from e

        logger.info("Connected to event stream Redis")
        self._client = client
        return client

    async def _reset(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @asynccontextmanager
    async def connection(self):
        """Yield the connected client, turning Redis errors into PubSubError."""
        client = await self._get_client()
        try:
            yield client
        except RedisError as e:
            logger.error(f"Event stream Redis error: {e}")
            await self._reset()
            raise PubSubError(f"Redis connection error: {e}") from e

    async def close(self) -> None:
        await self._reset()
        logger.info("Closed event stream Redis connection")
