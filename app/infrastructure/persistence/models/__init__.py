"""Persistence models: ORM entities."""

from app.infrastructure.persistence.models.entity import Entity

__all__ = ["Entity"]
