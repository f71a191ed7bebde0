"""Application services: entity consistency coordinator."""

from app.application.services.entity_coordinator import (
    DEFAULT_ENTITY_TTL,
    EntityCoordinator,
)

__all__ = [
    "DEFAULT_ENTITY_TTL",
    "EntityCoordinator",
]
