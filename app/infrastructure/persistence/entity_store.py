"""SQL-backed entity store (store adapter for the consistency coordinator).

Each method opens its own session from Database and, for writes, commits
before returning. Callers can rely on a returned write being durable.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.application.dtos.entity import EntityCreate, EntityResult, EntityUpdate
from app.domain.exceptions import (
    DuplicateEmailException,
    EntityNotFoundException,
    StoreReadException,
    StoreWriteException,
)
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.models.entity import Entity
from app.infrastructure.persistence.repositories.entity_repo import (
    EntityRepository,
    entity_to_result,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def _integrity_error(operation: str, error: IntegrityError, email: str | None) -> StoreWriteException:
    """Map a constraint violation; the only unique column is email."""
    text = str(error.orig).lower()
    if "unique" in text or "duplicate" in text:
        return DuplicateEmailException(operation, email)
    return StoreWriteException(operation, str(error.orig))


class SqlEntityStore:
    """IEntityStore over SQLAlchemy async sessions."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def create(self, data: EntityCreate) -> EntityResult:
        """Insert; missing timestamps default to now. Raises DuplicateEmailException/StoreWriteException."""
        now = utc_now()
        entity = Entity(
            name=data.name,
            email=data.email,
            created_at=data.created_at or now,
            updated_at=data.updated_at or now,
        )
        try:
            async with self.database.transaction() as session:
                created = await EntityRepository(session).create(entity)
                result = entity_to_result(created)
        except IntegrityError as e:
            raise _integrity_error("create", e, data.email) from e
        except SQLAlchemyError as e:
            logger.exception("Store create failed")
            raise StoreWriteException("create", str(e)) from e
        logger.debug("Store CREATE: entity %s", result.id)
        return result

    async def get_by_id(self, entity_id: int) -> EntityResult | None:
        try:
            async with self.database.session() as session:
                return await EntityRepository(session).get_result(entity_id)
        except SQLAlchemyError as e:
            logger.exception("Store read failed for entity %s", entity_id)
            raise StoreReadException("read", str(e)) from e

    async def update(self, entity_id: int, changes: EntityUpdate) -> EntityResult:
        """Partial update. Raises EntityNotFoundException if the row is gone."""
        try:
            async with self.database.transaction() as session:
                repo = EntityRepository(session)
                entity = await repo.get_by_id(entity_id)
                if entity is None:
                    raise EntityNotFoundException(entity_id)
                values = changes.changes()
                values.setdefault("updated_at", utc_now())
                updated = await repo.update(entity, values)
                result = entity_to_result(updated)
        except IntegrityError as e:
            raise _integrity_error("update", e, changes.email) from e
        except SQLAlchemyError as e:
            logger.exception("Store update failed for entity %s", entity_id)
            raise StoreWriteException("update", str(e)) from e
        logger.debug("Store UPDATE: entity %s", entity_id)
        return result

    async def delete(self, entity_id: int) -> None:
        """Delete. Raises EntityNotFoundException if the row is gone."""
        try:
            async with self.database.transaction() as session:
                repo = EntityRepository(session)
                entity = await repo.get_by_id(entity_id)
                if entity is None:
                    raise EntityNotFoundException(entity_id)
                await repo.delete(entity)
        except SQLAlchemyError as e:
            logger.exception("Store delete failed for entity %s", entity_id)
            raise StoreWriteException("delete", str(e)) from e
        logger.debug("Store DELETE: entity %s", entity_id)

    async def list_all(self) -> list[EntityResult]:
        try:
            async with self.database.session() as session:
                return await EntityRepository(session).list_results()
        except SQLAlchemyError as e:
            logger.exception("Store list failed")
            raise StoreReadException("list", str(e)) from e

    async def ping(self) -> bool:
        try:
            return await self.database.ping()
        except (SQLAlchemyError, OSError):
            logger.warning("Store ping failed", exc_info=True)
            return False
