"""Unit tests for the Redis CacheService with a mocked client."""

import json
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from app.core.config import get_settings
from app.domain.exceptions import CacheException
from app.infrastructure.cache.redis_cache import CacheService


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(redis_client: AsyncMock) -> CacheService:
    return CacheService(redis_client=redis_client, settings=get_settings())


async def test_get_decodes_json(service: CacheService, redis_client: AsyncMock) -> None:
    redis_client.get.return_value = json.dumps({"id": 3})
    assert await service.get("entity:3") == {"id": 3}
    redis_client.get.assert_awaited_once_with("entity:3")


async def test_get_miss_returns_none(service: CacheService, redis_client: AsyncMock) -> None:
    redis_client.get.return_value = None
    assert await service.get("entity:3") is None


async def test_get_undecodable_value_raises(service: CacheService, redis_client: AsyncMock) -> None:
    redis_client.get.return_value = "{not json"
    with pytest.raises(CacheException) as exc_info:
        await service.get("entity:3")
    assert exc_info.value.error_code == "CACHE_ERROR"


async def test_set_uses_setex_with_ttl(service: CacheService, redis_client: AsyncMock) -> None:
    await service.set("entity:3", 3, ttl=120)
    redis_client.setex.assert_awaited_once_with("entity:3", 120, "3")


async def test_set_unserializable_value_raises(service: CacheService, redis_client: AsyncMock) -> None:
    with pytest.raises(CacheException):
        await service.set("entity:3", object(), ttl=120)
    redis_client.setex.assert_not_awaited()


async def test_delete_absent_key_is_fine(service: CacheService, redis_client: AsyncMock) -> None:
    redis_client.delete.return_value = 0
    await service.delete("entity:3")
    redis_client.delete.assert_awaited_once_with("entity:3")


async def test_response_error_raises_without_reconnect(
    service: CacheService, redis_client: AsyncMock
) -> None:
    redis_client.delete.side_effect = redis.ResponseError("WRONGTYPE")
    service.connect = AsyncMock()
    with pytest.raises(CacheException):
        await service.delete("entity:3")
    service.connect.assert_not_awaited()


async def test_connection_error_raises_after_failed_reconnect(
    service: CacheService, redis_client: AsyncMock
) -> None:
    """One reconnect attempt; when it fails the error surfaces and the service is unavailable."""
    redis_client.get.side_effect = redis.ConnectionError("connection refused")
    service.connect = AsyncMock()
    with pytest.raises(CacheException):
        await service.get("entity:3")
    service.connect.assert_awaited_once()
    redis_client.aclose.assert_awaited_once()
    assert service.is_available() is False


async def test_connection_error_retries_once_on_new_client(
    service: CacheService, redis_client: AsyncMock
) -> None:
    redis_client.setex.side_effect = redis.ConnectionError("connection reset")
    fresh = AsyncMock()

    async def reconnect() -> None:
        service.redis = fresh
        service._connected = True

    service.connect = reconnect
    await service.set("entity:3", 3, ttl=60)
    fresh.setex.assert_awaited_once_with("entity:3", 60, "3")


async def test_unavailable_service_is_a_noop() -> None:
    service = CacheService(settings=get_settings())
    assert service.is_available() is False
    assert await service.get("entity:3") is None
    await service.set("entity:3", 3, ttl=60)
    await service.delete("entity:3")
    assert await service.ping() is False


async def test_disconnect_closes_client(service: CacheService, redis_client: AsyncMock) -> None:
    await service.disconnect()
    redis_client.aclose.assert_awaited_once()
    assert service.is_available() is False


async def test_ping_reports_redis_errors_as_false(
    service: CacheService, redis_client: AsyncMock
) -> None:
    redis_client.ping.side_effect = redis.ConnectionError("down")
    assert await service.ping() is False


async def test_failed_reconnect_is_retried_after_interval(monkeypatch, redis_client: AsyncMock) -> None:
    """A Redis blip does not disable the cache for good: the next due call reconnects."""
    settings = get_settings().model_copy(update={"redis_retry_interval": 0.0})
    service = CacheService(redis_client=redis_client, settings=settings)
    redis_client.get.side_effect = redis.ConnectionError("connection reset")

    refused = AsyncMock()
    refused.ping.side_effect = redis.ConnectionError("connection refused")
    healthy = AsyncMock()
    healthy.get.return_value = "1"
    clients = iter([refused, healthy])
    monkeypatch.setattr(redis, "Redis", lambda **kwargs: next(clients))

    with pytest.raises(CacheException):
        await service.get("entity:1")
    refused.aclose.assert_awaited_once()
    assert service.is_available() is True

    assert await service.get("entity:1") == 1
    healthy.get.assert_awaited_once_with("entity:1")


async def test_no_lazy_reconnect_before_interval(monkeypatch) -> None:
    settings = get_settings().model_copy(update={"redis_retry_interval": 3600.0})
    service = CacheService(settings=settings)
    refused = AsyncMock()
    refused.ping.side_effect = redis.ConnectionError("connection refused")
    monkeypatch.setattr(redis, "Redis", lambda **kwargs: refused)

    await service.connect()
    assert service.is_available() is False
    assert await service.get("entity:1") is None
    refused.ping.assert_awaited_once()
