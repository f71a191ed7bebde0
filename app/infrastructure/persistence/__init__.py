"""Persistence: SQLAlchemy engine context, ORM models, repositories and the entity store."""

from app.infrastructure.persistence.database import Base, Database
from app.infrastructure.persistence.entity_store import SqlEntityStore

__all__ = [
    "Base",
    "Database",
    "SqlEntityStore",
]
