"""Entity API: thin routes delegating to EntityCoordinator.

Error mapping (404 not found, 409 duplicate email, 500 store write) is done
by app.core.exception_handlers.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.api.v1.dependencies import get_entity_coordinator
from app.application.dtos.entity import EntityCreate, EntityUpdate
from app.application.services.entity_coordinator import EntityCoordinator
from app.schemas.entity import (
    EntityCreateRequest,
    EntityCreateResponse,
    EntityListResponse,
    EntityReadResponse,
    EntityResponse,
    EntityUpdateRequest,
    EntityUpdateResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

Coordinator = Annotated[EntityCoordinator, Depends(get_entity_coordinator)]
EntityId = Annotated[int, Path(ge=1, description="Entity id assigned by the store")]


@router.post("", response_model=EntityCreateResponse, status_code=201)
async def create_entity(body: EntityCreateRequest, coordinator: Coordinator):
    """Create an entity. Writes the store only; the cache is populated on first read."""
    created = await coordinator.create(
        EntityCreate(
            name=body.name,
            email=body.email,
            created_at=body.created_at,
            updated_at=body.updated_at,
        )
    )
    return EntityCreateResponse(data=EntityResponse.model_validate(created))


@router.get("/{entity_id}", response_model=EntityReadResponse)
async def get_entity(entity_id: EntityId, coordinator: Coordinator):
    """Get entity by id; "source" tells whether a cache entry existed."""
    read = await coordinator.get(entity_id)
    return EntityReadResponse(
        data=EntityResponse.model_validate(read.entity),
        source=read.source.value,
    )


@router.put("/{entity_id}", response_model=EntityUpdateResponse)
async def update_entity(
    entity_id: EntityId, body: EntityUpdateRequest, coordinator: Coordinator
):
    """Partially update an entity, then invalidate its cache entry."""
    updated = await coordinator.update(
        entity_id,
        EntityUpdate(
            name=body.name,
            email=body.email,
            created_at=body.created_at,
            updated_at=body.updated_at,
        ),
    )
    return EntityUpdateResponse(data=EntityResponse.model_validate(updated))


@router.delete("/{entity_id}", response_model=MessageResponse)
async def delete_entity(entity_id: EntityId, coordinator: Coordinator):
    """Delete an entity, then invalidate its cache entry."""
    await coordinator.delete(entity_id)
    return MessageResponse(message="entity deleted")


@router.get("", response_model=EntityListResponse)
async def list_entities(coordinator: Coordinator):
    """List all entities directly from the store (never cached)."""
    entities = await coordinator.list_all()
    return EntityListResponse(
        data=[EntityResponse.model_validate(e) for e in entities],
        count=len(entities),
    )
