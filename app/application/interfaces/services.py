"""Service interfaces (ports) consumed by application services."""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Key-value cache with expiry (DIP).

    Every failure (connection, timeout, serialization) raises CacheException.
    Deleting an absent key is a no-op.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None on a miss."""

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> None:
        """Delete key."""
