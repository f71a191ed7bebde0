"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (entity store, cache).
"""

from app.application.interfaces import ICacheService, IEntityStore
from app.application.services.entity_coordinator import EntityCoordinator

__all__ = [
    "EntityCoordinator",
    "ICacheService",
    "IEntityStore",
]
