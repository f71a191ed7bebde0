"""Tests for entity request schemas and client timestamp parsing."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from app.schemas.entity import EntityCreateRequest, EntityUpdateRequest
from app.shared.utils.datetime import ensure_utc, parse_client_timestamp


def test_parse_client_timestamp_is_utc() -> None:
    assert parse_client_timestamp("2024-03-01 12:30:00") == datetime(
        2024, 3, 1, 12, 30, tzinfo=UTC
    )


def test_parse_client_timestamp_names_layout_on_error() -> None:
    with pytest.raises(ValueError, match="%Y-%m-%d %H:%M:%S"):
        parse_client_timestamp("2024-03-01T12:30:00Z")


def test_ensure_utc_attaches_timezone_to_naive() -> None:
    assert ensure_utc(datetime(2024, 1, 1)).tzinfo is UTC
    assert ensure_utc(None) is None


def test_create_request_accepts_wire_aliases() -> None:
    body = EntityCreateRequest.model_validate(
        {
            "name": "Ada",
            "email": "ada@x.com",
            "createAt": "2024-03-01 12:30:00",
            "updateAt": "2024-03-02 08:00:00",
        }
    )
    assert body.created_at == datetime(2024, 3, 1, 12, 30, tzinfo=UTC)
    assert body.updated_at == datetime(2024, 3, 2, 8, 0, tzinfo=UTC)


def test_create_request_timestamps_optional() -> None:
    body = EntityCreateRequest.model_validate({"name": "Ada", "email": "ada@x.com"})
    assert body.created_at is None
    assert body.updated_at is None


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "ada@x.com"},
        {"name": "Ada"},
        {"name": "", "email": "ada@x.com"},
        {"name": "x" * 51, "email": "ada@x.com"},
        {"name": "Ada", "email": "not-an-email"},
        {"name": "Ada", "email": "a" * 95 + "@x.com"},
        {"name": "Ada", "email": "ada@x.com", "createAt": "01/03/2024"},
    ],
)
def test_create_request_rejects_invalid(payload: dict) -> None:
    with pytest.raises(ValidationError):
        EntityCreateRequest.model_validate(payload)


def test_update_request_all_fields_optional() -> None:
    body = EntityUpdateRequest.model_validate({})
    assert body.name is None
    assert body.email is None


def test_update_request_validates_present_fields() -> None:
    with pytest.raises(ValidationError):
        EntityUpdateRequest.model_validate({"email": "nope"})
