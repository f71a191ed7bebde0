"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.entity_repo import (
    EntityRepository,
    entity_to_result,
)

__all__ = [
    "BaseRepository",
    "EntityRepository",
    "entity_to_result",
]
