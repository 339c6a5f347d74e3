"""Unit tests for RedisStreamsClient."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.config_file import get_settings
from app.core.pubsub.client import RedisStreamsClient
from app.core.pubsub.errors import PubSubError


@pytest.fixture
def fake_redis(monkeypatch):
    """Replace redis.asyncio.from_url with a factory returning one AsyncMock client."""
    redis_client = AsyncMock()
    factory = MagicMock(return_value=redis_client)
    monkeypatch.setattr("app.core.pubsub.client.aioredis.from_url", factory)
    return factory, redis_client


def test_from_settings_uses_configured_redis():
    settings = get_settings()

    client = RedisStreamsClient.from_settings()

    assert client.redis_url == settings.REDIS_URL
    assert client.password == settings.REDIS_PASSWORD


@pytest.mark.asyncio
async def test_connection_connects_once(fake_redis):
    factory, redis_client = fake_redis
    client = RedisStreamsClient("redis://cache:6379/0", password="secret")

    async with client.connection() as first:
        assert first is redis_client
    async with client.connection() as second:
        assert second is redis_client

    factory.assert_called_once()
    assert factory.call_args.kwargs["password"] == "secret"
    redis_client.ping.assert_awaited_once()


@pytest.mark.asyncio
async def test_password_in_url_wins(fake_redis):
    factory, _ = fake_redis
    client = RedisStreamsClient("redis://:inline@cache:6379/0", password="secret")

    async with client.connection():
        pass

    assert "password" not in factory.call_args.kwargs


@pytest.mark.asyncio
async def test_unreachable_redis_raises_pubsub_error(fake_redis):
    _, redis_client = fake_redis
    redis_client.ping.side_effect = RedisConnectionError("refused")
    client = RedisStreamsClient("redis://cache:6379/0")

    with pytest.raises(PubSubError, match="Failed to connect to Redis"):
        async with client.connection():
            pass

    redis_client.aclose.assert_awaited_once()
    assert client._client is None


@pytest.mark.asyncio
async def test_redis_error_inside_connection_resets_client(fake_redis):
    factory, redis_client = fake_redis
    client = RedisStreamsClient("redis://cache:6379/0")

    with pytest.raises(PubSubError, match="Redis connection error"):
        async with client.connection():
            raise RedisConnectionError("connection reset")

    assert client._client is None
    redis_client.aclose.assert_awaited_once()

    async with client.connection():
        pass
    assert factory.call_count == 2
