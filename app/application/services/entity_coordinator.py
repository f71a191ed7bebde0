"""Entity consistency coordinator: every entity read and write goes through here.

Rules:
- The store is the source of truth; its failures propagate unchanged.
- The cache is an accelerator; CacheException from any cache call is logged
  and treated as a miss (reads) or as a delete that will happen by TTL
  expiry (writes). It never fails an operation.
- Reads populate entity:<id> on a cache miss. Creates and lists never touch
  the cache.
- Update and delete commit to the store first and invalidate the cache
  second, never the reverse.

The coordinator holds no locks and no mutable state, so one instance is
shared by all request tasks. Concurrent writers on the same id race at the
store with last-write-wins; a reader interleaved with a writer can re-cache
superseded data for at most one TTL.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from app.application.dtos.entity import (
    EntityCreate,
    EntityRead,
    EntityResult,
    EntityUpdate,
)
from app.application.interfaces.repositories import IEntityStore
from app.application.interfaces.services import ICacheService
from app.domain.enums import CacheMode, Provenance
from app.domain.exceptions import (
    CacheException,
    EntityNotFoundException,
    ValidationException,
)
from app.infrastructure.cache.keys import entity_key
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_ENTITY_TTL = 300


class EntityCoordinator:
    """Mediates entity CRUD between the store adapter and the cache adapter."""

    def __init__(
        self,
        store: IEntityStore,
        cache: ICacheService | None = None,
        *,
        ttl: int = DEFAULT_ENTITY_TTL,
        cache_mode: CacheMode = CacheMode.MARKER,
        accept_client_timestamps: bool = False,
    ) -> None:
        """Initialize with adapters and the process-wide cache policy.

        Args:
            store: Durable store adapter.
            cache: Cache adapter; None runs store-only.
            ttl: Time-to-live in seconds for every entity:<id> entry.
            cache_mode: MARKER caches the id and re-reads the store on a hit;
                CONTENT caches the serialized entity and serves hits directly.
            accept_client_timestamps: Keep caller-supplied created_at/updated_at
                instead of stamping server time.
        """
        self.store = store
        self.cache = cache
        self.ttl = ttl
        self.cache_mode = CacheMode(cache_mode)
        self.accept_client_timestamps = accept_client_timestamps

    # ---- cache access (all failures absorbed) ----

    def _cache_usable(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def _cache_get(self, key: str) -> Any | None:
        if not self._cache_usable():
            return None
        try:
            return await self.cache.get(key)
        except CacheException as e:
            logger.warning("Cache read failed, treating as miss: %s", e.message)
            add_span_event("cache.error", {"operation": "get", "key": key})
            return None

    async def _cache_set(self, key: str, value: Any) -> None:
        if not self._cache_usable():
            return
        try:
            await self.cache.set(key, value, ttl=self.ttl)
        except CacheException as e:
            logger.warning("Cache populate failed, ignoring: %s", e.message)
            add_span_event("cache.error", {"operation": "set", "key": key})

    async def _cache_invalidate(self, entity_id: int) -> None:
        """Delete entity:<id>. On failure the entry still expires after ttl."""
        if not self._cache_usable():
            return
        key = entity_key(entity_id)
        try:
            await self.cache.delete(key)
        except CacheException as e:
            logger.warning(
                "Cache invalidation failed, entry expires within %ss: %s",
                self.ttl,
                e.message,
            )
            add_span_event("cache.error", {"operation": "delete", "key": key})

    def _cache_value(self, entity: EntityResult) -> Any:
        if self.cache_mode is CacheMode.CONTENT:
            return entity.to_cache_payload()
        return entity.id

    @staticmethod
    def _decode_cached(value: Any) -> EntityResult | None:
        """Return the entity for a content payload, None for a marker (or anything undecodable)."""
        if not isinstance(value, dict):
            return None
        try:
            return EntityResult.from_cache_payload(value)
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed cached entity payload")
            return None

    # ---- operations ----

    @traced("entity.create")
    async def create(self, data: EntityCreate) -> EntityResult:
        """Write a new entity to the store. The cache is not touched.

        Raises:
            StoreWriteException: Store rejected the insert
                (DuplicateEmailException for a taken email).
        """
        if not self.accept_client_timestamps:
            now = utc_now()
            data = EntityCreate(
                name=data.name, email=data.email, created_at=now, updated_at=now
            )
        created = await self.store.create(data)
        logger.info("Entity created: %s", created.id)
        return created

    @traced("entity.get")
    async def get(self, entity_id: int) -> EntityRead:
        """Read one entity, tagging the result with its provenance.

        A cache hit in marker mode still reads the store for content; when
        that store read misses (entity deleted behind the cache's back) the
        result is not-found, never stale content.

        Raises:
            EntityNotFoundException: No entity with this id.
            StoreReadException: Store could not be queried.
        """
        key = entity_key(entity_id)
        cached = await self._cache_get(key)
        if cached is not None:
            entity = self._decode_cached(cached)
            if entity is None:
                entity = await self.store.get_by_id(entity_id)
                if entity is None:
                    logger.debug("Stale cache entry for entity %s", entity_id)
                    await self._cache_invalidate(entity_id)
                    raise EntityNotFoundException(entity_id)
            add_span_attributes(**{"entity.source": Provenance.CACHE.value})
            logger.debug("Entity %s served via cache", entity_id)
            return EntityRead(entity=entity, source=Provenance.CACHE)

        entity = await self.store.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundException(entity_id)
        await self._cache_set(key, self._cache_value(entity))
        add_span_attributes(**{"entity.source": Provenance.STORE.value})
        logger.debug("Entity %s served from store", entity_id)
        return EntityRead(entity=entity, source=Provenance.STORE)

    @traced("entity.update")
    async def update(self, entity_id: int, changes: EntityUpdate) -> EntityResult:
        """Apply a partial update, then invalidate entity:<id>.

        Raises:
            ValidationException: No field to update.
            EntityNotFoundException: No entity with this id.
            StoreWriteException: Store rejected the update; the cache is left alone.
        """
        if not self.accept_client_timestamps:
            changes = EntityUpdate(name=changes.name, email=changes.email)
        if not changes.changes():
            raise ValidationException("At least one field is required for update")
        if not self.accept_client_timestamps:
            changes = replace(changes, updated_at=utc_now())
        try:
            updated = await self.store.update(entity_id, changes)
        except EntityNotFoundException:
            await self._cache_invalidate(entity_id)
            raise
        await self._cache_invalidate(entity_id)
        logger.info("Entity updated: %s", entity_id)
        return updated

    @traced("entity.delete")
    async def delete(self, entity_id: int) -> None:
        """Delete from the store, then invalidate entity:<id>.

        Raises:
            EntityNotFoundException: No entity with this id (e.g. second delete).
            StoreWriteException: Store rejected the delete; the cache is left alone.
        """
        try:
            await self.store.delete(entity_id)
        except EntityNotFoundException:
            await self._cache_invalidate(entity_id)
            raise
        await self._cache_invalidate(entity_id)
        logger.info("Entity deleted: %s", entity_id)

    @traced("entity.list")
    async def list_all(self) -> list[EntityResult]:
        """Return all entities straight from the store; the cache is never consulted."""
        entities = await self.store.list_all()
        add_span_attributes(**{"entity.count": len(entities)})
        return entities
