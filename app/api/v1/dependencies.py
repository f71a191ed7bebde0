"""Presentation-layer dependency injection (composition root).

The coordinator and adapters are built once in the lifespan and stored on
app.state; routes receive them through Depends() and never construct
infrastructure themselves.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from app.application.interfaces.repositories import IEntityStore
from app.application.services.entity_coordinator import EntityCoordinator
from app.infrastructure.cache.redis_cache import CacheService


def get_entity_coordinator(request: Request) -> EntityCoordinator:
    """Shared EntityCoordinator from app.state (503 if startup did not build one)."""
    coordinator = getattr(request.app.state, "entity_coordinator", None)
    if coordinator is None:
        raise HTTPException(status_code=503, detail="Entity service not initialized")
    return coordinator


def get_entity_store(request: Request) -> IEntityStore | None:
    """Store adapter for readiness checks, or None before startup."""
    return getattr(request.app.state, "entity_store", None)


def get_cache(request: Request) -> CacheService | None:
    """Cache adapter for readiness checks, or None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)
