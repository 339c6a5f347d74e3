"""Shared async Redis client for query execution bookkeeping."""

import logging

import redis.asyncio as redis

from app.core.config_file import get_settings

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


async def get_redis_client() -> redis.Redis:
    """Return the process-wide client, created on first call.

    No connection is opened here; redis-py connects on the first command.
    """
    global _redis_client
    if _redis_client is None:
        settings = get_settings()
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            password=settings.REDIS_PASSWORD or None,
            decode_responses=True,
        )
        logger.debug("Created shared Redis client")
    return _redis_client


async def close_redis_client() -> None:
    """Close the shared client if one was created."""
    global _redis_client
    if _redis_client is None:
        return
    await _redis_client.aclose()
    _redis_client = None
