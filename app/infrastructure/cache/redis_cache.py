"""Redis-based cache service.

Async Redis client with JSON values and per-key TTL. Failures surface as
CacheException so the caller decides how to absorb them; this service does
one reconnect attempt on connection loss. After a failed connect it stays
unavailable until REDIS_RETRY_INTERVAL has passed, then the next call
tries to connect again.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.domain.exceptions import CacheException

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown. While Redis is
    unreachable the service is unavailable and the application runs
    store-only; a connect is retried at most once per retry interval.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. A client
                passed here is treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        # monotonic time after which a lazy connect may be tried; None = never
        self._retry_at: float | None = None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.warning(
                "Redis connection failed: %s. Cache disabled, retry in %ss.",
                e,
                self.settings.redis_retry_interval,
            )
            await client.aclose()
            self._schedule_retry()
            return
        self.redis = client
        self._connected = True
        self._retry_at = None
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")
        self._retry_at = None

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis client", exc_info=True)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def _schedule_retry(self) -> None:
        self._retry_at = time.monotonic() + self.settings.redis_retry_interval

    def _retry_due(self) -> bool:
        return self._retry_at is not None and time.monotonic() >= self._retry_at

    async def _ensure_connected(self) -> bool:
        """Return True if connected, connecting first when a retry is due."""
        if self._connected and self.redis is not None:
            return True
        if not self._retry_due():
            return False
        self._retry_at = None
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected, or a reconnect is due on the next call."""
        return (self._connected and self.redis is not None) or self._retry_due()

    async def ping(self) -> bool:
        """Return True if Redis answers PING."""
        if not await self._ensure_connected() or self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError:
            return False

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None on a miss.

        Raises:
            CacheException: Redis unreachable after one reconnect, or the
                stored value is not valid JSON.
        """
        if not await self._ensure_connected() or self.redis is None:
            return None
        try:
            raw = await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if not await self._reconnect():
                raise CacheException("get", key, str(e)) from e
            try:
                raw = await self.redis.get(key)
            except redis.RedisError as retry_error:
                raise CacheException("get", key, str(retry_error)) from retry_error
        except redis.RedisError as e:
            raise CacheException("get", key, str(e)) from e
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        try:
            return json.loads(raw)
        except ValueError as e:
            raise CacheException("get", key, f"undecodable value: {e}") from e

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value (JSON-serialized) with TTL in seconds.

        Raises:
            CacheException: Serialization failed or Redis is unreachable.
        """
        if not await self._ensure_connected() or self.redis is None:
            return
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheException("set", key, f"unserializable value: {e}") from e
        try:
            await self.redis.setex(key, ttl, serialized)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if not await self._reconnect():
                raise CacheException("set", key, str(e)) from e
            try:
                await self.redis.setex(key, ttl, serialized)
            except redis.RedisError as retry_error:
                raise CacheException("set", key, str(retry_error)) from retry_error
        except redis.RedisError as e:
            raise CacheException("set", key, str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key from cache. An absent key is not an error.

        Raises:
            CacheException: Redis is unreachable.
        """
        if not await self._ensure_connected() or self.redis is None:
            return
        try:
            removed = await self.redis.delete(key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if not await self._reconnect():
                raise CacheException("delete", key, str(e)) from e
            try:
                removed = await self.redis.delete(key)
            except redis.RedisError as retry_error:
                raise CacheException("delete", key, str(retry_error)) from retry_error
        except redis.RedisError as e:
            raise CacheException("delete", key, str(e)) from e
        logger.debug("Cache DELETE: %s (removed=%s)", key, removed)
