"""Cache: Redis service and cache key utilities.

Used by the entity consistency coordinator. CacheService uses
app.core.config; key format is in keys.py.
"""

from app.infrastructure.cache.keys import entity_key
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "entity_key",
]
