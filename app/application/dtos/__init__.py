"""Application DTOs (no ORM dependency)."""

from app.application.dtos.entity import (
    EntityCreate,
    EntityRead,
    EntityResult,
    EntityUpdate,
)

__all__ = [
    "EntityCreate",
    "EntityRead",
    "EntityResult",
    "EntityUpdate",
]
