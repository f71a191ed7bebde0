"""DTOs for entity use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import Provenance


@dataclass(frozen=True)
class EntityResult:
    """Entity read-model returned by the store adapter and the coordinator."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    def to_cache_payload(self) -> dict[str, Any]:
        """JSON-safe dict stored under entity:<id> in content mode."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_cache_payload(cls, payload: dict[str, Any]) -> EntityResult:
        """Inverse of to_cache_payload. Raises KeyError/TypeError/ValueError on a malformed payload."""
        return cls(
            id=int(payload["id"]),
            name=payload["name"],
            email=payload["email"],
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=datetime.fromisoformat(payload["updated_at"]),
        )


@dataclass(frozen=True)
class EntityCreate:
    """Fields for a new entity. Timestamps are only honored when client timestamps are enabled."""

    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class EntityUpdate:
    """Partial update: only fields that are not None are written."""

    name: str | None = None
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def changes(self) -> dict[str, Any]:
        """Return the set fields as a column -> value mapping."""
        return {
            k: v
            for k, v in (
                ("name", self.name),
                ("email", self.email),
                ("created_at", self.created_at),
                ("updated_at", self.updated_at),
            )
            if v is not None
        }


@dataclass(frozen=True)
class EntityRead:
    """Result of a single-entity read, tagged with where it was satisfied from."""

    entity: EntityResult
    source: Provenance = field(default=Provenance.STORE)
