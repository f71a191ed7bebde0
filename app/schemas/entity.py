"""Entity API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.shared.utils.datetime import parse_client_timestamp

EMAIL_MAX_LENGTH = 100


def _parse_optional_timestamp(value: object) -> object:
    """Accept "YYYY-MM-DD HH:MM:SS" strings; pass None and datetimes through."""
    if isinstance(value, str):
        return parse_client_timestamp(value)
    return value


def _check_email_length(value: str | None) -> str | None:
    """Email column is VARCHAR(100)."""
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class EntityCreateRequest(BaseModel):
    """Request body for creating an entity.

    createAt / updateAt are only stored when ACCEPT_CLIENT_TIMESTAMPS is enabled.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    created_at: datetime | None = Field(default=None, alias="createAt")
    updated_at: datetime | None = Field(default=None, alias="updateAt")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamps(cls, value: object) -> object:
        return _parse_optional_timestamp(value)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value: str | None) -> str | None:
        return _check_email_length(value)


class EntityUpdateRequest(BaseModel):
    """Request body for updating an entity (partial; omitted fields are unchanged)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    created_at: datetime | None = Field(default=None, alias="createAt")
    updated_at: datetime | None = Field(default=None, alias="updateAt")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamps(cls, value: object) -> object:
        return _parse_optional_timestamp(value)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value: str | None) -> str | None:
        return _check_email_length(value)


class EntityResponse(BaseModel):
    """Entity as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class EntityReadResponse(BaseModel):
    """Single-entity read with provenance ("cache" or "store")."""

    data: EntityResponse
    source: Literal["cache", "store"]


class EntityCreateResponse(BaseModel):
    message: str = "entity created"
    data: EntityResponse


class EntityUpdateResponse(BaseModel):
    message: str = "entity updated"
    data: EntityResponse


class EntityListResponse(BaseModel):
    """Full, unpaginated entity list."""

    data: list[EntityResponse]
    count: int


class MessageResponse(BaseModel):
    message: str
