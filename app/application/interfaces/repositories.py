"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.entity import EntityCreate, EntityResult, EntityUpdate


class IEntityStore(Protocol):
    """Durable entity store (source of truth).

    Each call is its own unit of work: when a write returns, it is committed.
    Writes raise StoreWriteException (or DuplicateEmailException) when the
    store rejects them; update/delete raise EntityNotFoundException for an
    unknown id.
    """

    async def create(self, data: EntityCreate) -> EntityResult:
        """Insert a new entity; the store assigns the id."""

    async def get_by_id(self, entity_id: int) -> EntityResult | None:
        """Return entity by id, or None."""

    async def update(self, entity_id: int, changes: EntityUpdate) -> EntityResult:
        """Apply a partial update and return the stored entity."""

    async def delete(self, entity_id: int) -> None:
        """Remove the entity."""

    async def list_all(self) -> list[EntityResult]:
        """Return every entity (unfiltered, ordered by id)."""

    async def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
