"""API request/response schemas (Pydantic)."""

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
from app.schemas.health import HealthResponse, ReadinessResponse

__all__ = [
    "EntityCreateRequest",
    "EntityCreateResponse",
    "EntityListResponse",
    "EntityReadResponse",
    "EntityResponse",
    "EntityUpdateRequest",
    "EntityUpdateResponse",
    "HealthResponse",
    "MessageResponse",
    "ReadinessResponse",
]
