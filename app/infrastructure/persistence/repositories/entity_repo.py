"""Entity repository (session-scoped). Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.entity import EntityResult
from app.infrastructure.persistence.models.entity import Entity
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def entity_to_result(e: Entity) -> EntityResult:
    """Map ORM Entity to application EntityResult."""
    return EntityResult(
        id=e.id,
        name=e.name,
        email=e.email,
        created_at=ensure_utc(e.created_at),
        updated_at=ensure_utc(e.updated_at),
    )


class EntityRepository(BaseRepository[Entity]):
    """Entity repository over one AsyncSession. Errors propagate as SQLAlchemy exceptions."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Entity)

    async def get_result(self, entity_id: int) -> EntityResult | None:
        entity = await self.get_by_id(entity_id)
        return entity_to_result(entity) if entity else None

    async def list_results(self) -> list[EntityResult]:
        return [entity_to_result(e) for e in await self.get_all()]
