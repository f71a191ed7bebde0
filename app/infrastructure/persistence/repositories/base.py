"""Base repository: generic CRUD over one session."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, update, delete.

    Works inside the caller's session; committing is the caller's job
    (see Database.transaction()).
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def get_all(self) -> list[ModelType]:
        """Return every record ordered by primary key."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).order_by(model.id))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server-assigned columns (id)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType, changes: dict[str, Any]) -> ModelType:
        """Apply column changes to an attached record and flush."""
        for key, value in changes.items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record and flush."""
        await self.db.delete(obj)
        await self.db.flush()
